"""FastAPI proxy for the USGS feed plus a derived-metrics endpoint."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Annotated, Any

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from requests import RequestException

from quake_watch import __version__
from quake_watch.config import QuakeWatchConfig, TimeRange
from quake_watch.feed import build_location_query, format_instant, resolve_time_window
from quake_watch.fetchers.usgs import fetch_feed, parse_events
from quake_watch.http import create_session
from quake_watch.models import ObserverLocation, TimeWindow
from quake_watch.pipeline import build_view

logger = logging.getLogger(__name__)


class QueryValidationError(ValueError):
    """A query parameter failed the proxy's bounds checks."""


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    """Build settings and the shared HTTP session once per process."""
    application.state.config = QuakeWatchConfig()
    application.state.session = create_session()
    yield
    application.state.session.close()


app = FastAPI(
    title="Quake Watch API",
    description="USGS earthquake feed proxy with derived quake metrics.",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=QuakeWatchConfig().cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(QueryValidationError)
async def _query_error(request: Request, exc: QueryValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def _request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = [{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid query parameters", "detail": detail},
    )


def _upstream_failure(exc: Exception) -> JSONResponse:
    logger.exception("USGS request failed")
    return JSONResponse(
        status_code=500,
        content={"error": f"Failed to fetch earthquake data: {exc}"},
    )


def _parse_instant(value: str, name: str) -> datetime:
    try:
        instant = datetime.fromisoformat(value)
    except ValueError:
        raise QueryValidationError(f"{name} must be an ISO-8601 timestamp") from None
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


def _validated_observer(latitude: float | None, longitude: float | None) -> ObserverLocation:
    if latitude is None or longitude is None:
        raise QueryValidationError("Latitude and longitude are required parameters")
    if not -90 <= latitude <= 90:
        raise QueryValidationError("Latitude must be between -90 and 90 degrees")
    if not -180 <= longitude <= 180:
        raise QueryValidationError("Longitude must be between -180 and 180 degrees")
    return ObserverLocation(latitude=latitude, longitude=longitude)


def _validated_radius(radius: float | None, config: QuakeWatchConfig) -> float:
    if radius is None:
        return config.default_radius_km
    if radius <= 0:
        raise QueryValidationError("Radius must be a positive number")
    return radius


def _validated_limit(limit: int | None, config: QuakeWatchConfig) -> int:
    if limit is None:
        return config.default_limit
    if limit <= 0:
        raise QueryValidationError("Limit must be a positive integer")
    return limit


def _query_window(
    starttime: str | None,
    endtime: str | None,
    time_range: str,
) -> TimeWindow:
    """Explicit timestamps win; missing ends come from the time-range window."""
    default = resolve_time_window(time_range)
    start = _parse_instant(starttime, "starttime") if starttime else default.start
    end = _parse_instant(endtime, "endtime") if endtime else default.end
    return TimeWindow(start=start, end=end)


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }


@app.get("/earthquakes")
def get_earthquakes(request: Request) -> JSONResponse:
    """Worldwide events of the last 24 hours, returned as USGS sent them."""
    config: QuakeWatchConfig = request.app.state.config
    window = resolve_time_window("24h")
    params = {
        "format": "geojson",
        "starttime": format_instant(window.start),
        "endtime": format_instant(window.end),
    }
    try:
        data = fetch_feed(
            params,
            url=config.usgs_api_url,
            timeout=config.request_timeout,
            session=request.app.state.session,
        )
    except (RequestException, ValueError) as exc:
        return _upstream_failure(exc)
    return JSONResponse(content=data)


@app.get("/earthquakes/location")
def get_earthquakes_by_location(
    request: Request,
    latitude: Annotated[float | None, Query(description="Observer latitude.")] = None,
    longitude: Annotated[float | None, Query(description="Observer longitude.")] = None,
    radius: Annotated[float | None, Query(description="Search radius in km.")] = None,
    starttime: Annotated[str | None, Query(description="ISO-8601 window start.")] = None,
    endtime: Annotated[str | None, Query(description="ISO-8601 window end.")] = None,
    limit: Annotated[int | None, Query(description="Maximum number of events.")] = None,
) -> JSONResponse:
    """Validate the location query and forward it to USGS unmodified."""
    config: QuakeWatchConfig = request.app.state.config
    observer = _validated_observer(latitude, longitude)
    params = build_location_query(
        observer,
        _validated_radius(radius, config),
        _query_window(starttime, endtime, config.default_time_range),
        _validated_limit(limit, config),
    )
    try:
        data = fetch_feed(
            params,
            url=config.usgs_api_url,
            timeout=config.request_timeout,
            session=request.app.state.session,
        )
    except (RequestException, ValueError) as exc:
        return _upstream_failure(exc)
    return JSONResponse(content=data)


@app.get("/earthquakes/metrics")
def get_earthquake_metrics(
    request: Request,
    latitude: Annotated[float | None, Query(description="Observer latitude.")] = None,
    longitude: Annotated[float | None, Query(description="Observer longitude.")] = None,
    radius: Annotated[float | None, Query(description="Search radius in km.")] = None,
    time_range: Annotated[TimeRange | None, Query(description="Time range token.")] = None,
    limit: Annotated[int | None, Query(description="Maximum number of events.")] = None,
) -> JSONResponse:
    """Events around the observer with distance, arrival, effect and risk."""
    config: QuakeWatchConfig = request.app.state.config
    observer = _validated_observer(latitude, longitude)
    token = time_range or config.default_time_range
    window = resolve_time_window(token)
    params = build_location_query(
        observer,
        _validated_radius(radius, config),
        window,
        _validated_limit(limit, config),
    )
    try:
        events = parse_events(
            fetch_feed(
                params,
                url=config.usgs_api_url,
                timeout=config.request_timeout,
                session=request.app.state.session,
            )
        )
    except (RequestException, ValueError) as exc:
        return _upstream_failure(exc)

    return JSONResponse(
        content={
            "observer": asdict(observer),
            "time_range": token,
            "starttime": format_instant(window.start),
            "endtime": format_instant(window.end),
            "count": len(events),
            "earthquakes": [
                {**asdict(eq), "metrics": asdict(metrics)}
                for eq, metrics in build_view(events, observer)
            ],
        }
    )
