"""Data models for earthquake events and their derived metrics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

EffectLevel = Literal["Minimal", "Light", "Moderate", "Strong", "Very Strong"]
AlertLevel = Literal["green", "yellow", "orange", "red"]


@dataclass(frozen=True)
class EarthquakeEvent:
    """A single earthquake as received from the USGS feed.

    Only ``magnitude``, ``depth_km``, ``latitude``, ``longitude`` and
    ``time_ms`` take part in derived computations; the remaining fields
    are display data passed through unchanged.
    """

    id: str
    magnitude: float
    depth_km: float
    latitude: float
    longitude: float
    time_ms: int
    place: str = ""
    status: str = ""
    alert: AlertLevel | None = None
    tsunami: int = 0
    felt: int | None = None
    cdi: float | None = None
    mmi: float | None = None
    significance: int = 0
    mag_type: str = ""
    url: str = ""


@dataclass(frozen=True)
class ObserverLocation:
    """The point relative to which distance, effect and arrival are computed."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class WaveArrival:
    """Estimated delay of one seismic phase at the observer."""

    delay_seconds: float
    formatted: str


@dataclass(frozen=True)
class ArrivalTimes:
    p_wave: WaveArrival
    s_wave: WaveArrival


@dataclass(frozen=True)
class RiskProfile:
    """Qualitative risk classifications for one event."""

    aftershock_probability: str
    risk_level: str
    affected_area_radius: str
    building_damage_risk: str
    significance_level: str
    magnitude_classification: str
    safety_recommendations: tuple[str, ...]
    intensity: str | None = None  # None when the event carries no MMI


@dataclass(frozen=True)
class DerivedMetrics:
    """Everything computed for one event relative to one observer."""

    distance_km: float
    arrival: ArrivalTimes
    effect: EffectLevel
    risk: RiskProfile


@dataclass(frozen=True)
class TimeWindow:
    """Absolute query window, both ends timezone-aware UTC."""

    start: datetime
    end: datetime


@dataclass
class LiveMonitorState:
    """Process-local state of one live monitoring session."""

    enabled: bool = False
    last_seen_event_id: str | None = None
    previous_time_range: str | None = None


@dataclass(frozen=True)
class NewEventAlert:
    """A feed head that has not been seen before, with its arrival estimates."""

    event: EarthquakeEvent
    distance_km: float
    arrival: ArrivalTimes
