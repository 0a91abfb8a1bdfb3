"""P-wave and S-wave arrival estimates.

The velocities are a fixed two-constant approximation, not a travel-time
curve: real phase velocities vary with medium and depth. They are kept
constant so that displayed estimates stay stable across releases.
"""

from __future__ import annotations

import math

from quake_watch.models import ArrivalTimes, WaveArrival

P_WAVE_VELOCITY_KM_S = 7.0
S_WAVE_VELOCITY_KM_S = 4.0


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_duration(seconds: float) -> str:
    """Render a delay as a short human string.

    The total is rounded half-up to whole seconds before it is split, so
    59.6s renders as "1 min 0 secs". Hour-scale values drop the seconds.
    """
    if seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {seconds}")

    total = math.floor(seconds + 0.5)
    if total < 60:
        return f"{total} seconds"
    if total < 3600:
        minutes, secs = divmod(total, 60)
        return f"{_plural(minutes, 'min')} {_plural(secs, 'sec')}"
    hours, remainder = divmod(total, 3600)
    return f"{_plural(hours, 'hr')} {_plural(remainder // 60, 'min')}"


def _wave(distance_km: float, velocity_km_s: float) -> WaveArrival:
    delay = distance_km / velocity_km_s
    return WaveArrival(delay_seconds=delay, formatted=format_duration(delay))


def arrival_times(distance_km: float) -> ArrivalTimes:
    """Estimate P-wave and S-wave arrival delays for an epicentral distance.

    Raises:
        ValueError: if ``distance_km`` is negative.
    """
    if distance_km < 0:
        raise ValueError(f"Distance must be non-negative, got {distance_km}")
    return ArrivalTimes(
        p_wave=_wave(distance_km, P_WAVE_VELOCITY_KM_S),
        s_wave=_wave(distance_km, S_WAVE_VELOCITY_KM_S),
    )
