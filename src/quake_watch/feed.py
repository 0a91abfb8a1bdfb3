"""Time-range tokens and USGS location query parameters."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from quake_watch.models import ObserverLocation, TimeWindow

TIME_RANGES: dict[str, timedelta] = {
    "1h": timedelta(hours=1),
    "24h": timedelta(days=1),
    "7d": timedelta(days=7),
    "14d": timedelta(days=14),
    "30d": timedelta(days=30),
}

DEFAULT_TIME_RANGE = "24h"

# Narrowest token whose span covers a given duration, smallest first.
_SPAN_TOKENS: tuple[tuple[timedelta, str], ...] = (
    (timedelta(hours=1), "1h"),
    (timedelta(hours=24), "24h"),
    (timedelta(hours=168), "7d"),
    (timedelta(hours=336), "14d"),
)


def resolve_time_window(token: str, now: datetime | None = None) -> TimeWindow:
    """Map a time-range token to an absolute window ending at ``now``.

    Unknown tokens fall back to the 24 hour window. ``now`` defaults to the
    current UTC time; pass it explicitly for deterministic results.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    span = TIME_RANGES.get(token, TIME_RANGES[DEFAULT_TIME_RANGE])
    return TimeWindow(start=now - span, end=now)


def infer_time_range(start: datetime, end: datetime) -> str:
    """Pick the token matching an explicit date span (order-insensitive)."""
    span = abs(end - start)
    for limit, token in _SPAN_TOKENS:
        if span <= limit:
            return token
    return "30d"


def format_instant(instant: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a trailing Z, as the FDSN service expects."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def build_location_query(
    observer: ObserverLocation,
    radius_km: float,
    window: TimeWindow,
    limit: int,
) -> dict[str, str | float | int]:
    """Assemble the FDSN query parameters for a radius search.

    Radius and limit are passed through verbatim; bounds checking belongs
    to the caller.
    """
    return {
        "format": "geojson",
        "latitude": observer.latitude,
        "longitude": observer.longitude,
        "maxradiuskm": radius_km,
        "starttime": format_instant(window.start),
        "endtime": format_instant(window.end),
        "limit": limit,
    }
