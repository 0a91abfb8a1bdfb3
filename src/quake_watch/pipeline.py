"""Per-event metrics pipeline: distance -> arrival -> effect -> risk."""

from __future__ import annotations

from quake_watch.arrival import arrival_times
from quake_watch.assessment import assess_risk
from quake_watch.config import SortDirection, SortField
from quake_watch.effect import classify_effect
from quake_watch.geo import distance_km
from quake_watch.models import DerivedMetrics, EarthquakeEvent, ObserverLocation


def derive_metrics(event: EarthquakeEvent, observer: ObserverLocation) -> DerivedMetrics:
    """Compute every derived value for one event as seen from ``observer``."""
    distance = distance_km(
        observer.latitude, observer.longitude, event.latitude, event.longitude
    )
    return DerivedMetrics(
        distance_km=distance,
        arrival=arrival_times(distance),
        effect=classify_effect(event.magnitude, event.depth_km, distance),
        risk=assess_risk(event),
    )


def build_view(
    events: list[EarthquakeEvent],
    observer: ObserverLocation,
) -> list[tuple[EarthquakeEvent, DerivedMetrics]]:
    """Pair each event with its metrics, keeping input order."""
    return [(eq, derive_metrics(eq, observer)) for eq in events]


def filter_events(
    events: list[EarthquakeEvent],
    min_magnitude: float | None = None,
    place_query: str | None = None,
) -> list[EarthquakeEvent]:
    """Keep events at or above ``min_magnitude`` whose place contains ``place_query``."""
    result = events
    if min_magnitude is not None:
        result = [eq for eq in result if eq.magnitude >= min_magnitude]
    if place_query:
        needle = place_query.casefold()
        result = [eq for eq in result if needle in eq.place.casefold()]
    return result


def sort_events(
    events: list[EarthquakeEvent],
    field: SortField = "time",
    direction: SortDirection = "desc",
) -> list[EarthquakeEvent]:
    """Sort for the list view.

    ``desc`` puts the newest, largest, or shallowest events first. The
    sort is stable in both directions: events with equal keys keep their
    feed order.
    """
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {direction!r}")
    descending = direction == "desc"

    if field == "time":
        return sorted(events, key=lambda eq: eq.time_ms, reverse=descending)
    if field == "magnitude":
        return sorted(events, key=lambda eq: eq.magnitude, reverse=descending)
    if field == "depth":
        return sorted(events, key=lambda eq: eq.depth_km, reverse=not descending)
    raise ValueError(f"Unknown sort field: {field!r}")
