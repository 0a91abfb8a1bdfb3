"""USGS earthquake feed fetchers."""

from __future__ import annotations

import logging
from typing import Any

from requests import Session

from quake_watch.config import USGS_API_URL
from quake_watch.feed import build_location_query
from quake_watch.http import create_session
from quake_watch.models import EarthquakeEvent, ObserverLocation, TimeWindow

logger = logging.getLogger(__name__)


def fetch_feed(
    params: dict[str, Any],
    url: str = USGS_API_URL,
    timeout: int = 30,
    session: Session | None = None,
) -> dict[str, Any]:
    """Query the FDSN event service and return the raw GeoJSON payload.

    Raises:
        requests.RequestException: on transport errors or non-2xx responses.
        ValueError: if the body is not a GeoJSON FeatureCollection.
    """
    if session is None:
        session = create_session()

    logger.debug("Querying USGS feed with %s", params)
    resp = session.get(url, params=params, timeout=timeout)
    resp.raise_for_status()

    data = resp.json()
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise ValueError("Malformed USGS response: missing 'features' list")
    logger.debug("USGS returned %d features", len(data["features"]))
    return data


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Field {name!r} must be numeric, got {value!r}")
    return float(value)


def parse_event(feature: dict[str, Any]) -> EarthquakeEvent:
    """Build an EarthquakeEvent from one GeoJSON feature.

    Raises:
        ValueError: if magnitude, origin time or coordinates are missing or
            not numeric.
    """
    props = feature.get("properties") or {}
    coords = (feature.get("geometry") or {}).get("coordinates") or []
    if len(coords) < 3:
        raise ValueError(f"Feature {feature.get('id')!r} has incomplete coordinates")

    return EarthquakeEvent(
        id=str(feature["id"]),
        magnitude=_number(props.get("mag"), "mag"),
        depth_km=_number(coords[2], "depth"),
        latitude=_number(coords[1], "latitude"),
        longitude=_number(coords[0], "longitude"),
        time_ms=int(_number(props.get("time"), "time")),
        place=props.get("place") or "",
        status=props.get("status") or "",
        alert=props.get("alert"),
        tsunami=int(props.get("tsunami") or 0),
        felt=props.get("felt"),
        cdi=props.get("cdi"),
        mmi=props.get("mmi"),
        significance=int(props.get("sig") or 0),
        mag_type=props.get("magType") or "",
        url=props.get("url") or "",
    )


def parse_events(geojson: dict[str, Any]) -> list[EarthquakeEvent]:
    """Parse every usable feature, keeping feed order.

    Features without an id, magnitude, time or full coordinates cannot be
    used for derived metrics and are skipped with a warning.
    """
    events: list[EarthquakeEvent] = []
    for feat in geojson.get("features", []):
        try:
            events.append(parse_event(feat))
        except (KeyError, ValueError) as exc:
            logger.warning("Skipping unusable feature %s: %s", feat.get("id"), exc)
    return events


def fetch_events(
    observer: ObserverLocation,
    radius_km: float,
    window: TimeWindow,
    limit: int = 100,
    url: str = USGS_API_URL,
    timeout: int = 30,
    session: Session | None = None,
) -> list[EarthquakeEvent]:
    """Fetch and parse events within ``radius_km`` of the observer."""
    params = build_location_query(observer, radius_km, window, limit)
    return parse_events(fetch_feed(params, url=url, timeout=timeout, session=session))
