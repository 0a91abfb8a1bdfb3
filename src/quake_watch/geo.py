"""Geographic utilities: Haversine distance and preset observer regions."""

from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0

# Two coordinates closer than this (in degrees) count as the same pin.
_REGION_TOLERANCE_DEG = 0.0001


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance in km between two points on Earth.

    Inputs are decimal degrees. Out-of-range coordinates are not rejected
    here; they still yield a number.
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


@dataclass(frozen=True)
class Region:
    """A named preset observer location."""

    name: str
    latitude: float
    longitude: float


REGIONS: tuple[Region, ...] = (
    Region("Bangkok", 13.7563, 100.5018),
    Region("Phuket", 7.8804, 98.3923),
    Region("Chiang Mai", 18.7883, 98.9853),
    Region("Hua Hin", 12.5684, 99.9577),
    Region("Pattaya", 12.9236, 100.8824),
    Region("Samui", 9.5120, 100.0136),
)


def find_region(name: str) -> Region:
    """Look up a preset region by name, ignoring case and surrounding spaces."""
    wanted = name.strip().casefold()
    for region in REGIONS:
        if region.name.casefold() == wanted:
            return region
    raise KeyError(f"Unknown region: {name!r}")


def is_selected_region(latitude: float, longitude: float, region: Region) -> bool:
    """True when the given pin sits on ``region`` (within 0.0001 degrees)."""
    return (
        abs(latitude - region.latitude) < _REGION_TOLERANCE_DEG
        and abs(longitude - region.longitude) < _REGION_TOLERANCE_DEG
    )
