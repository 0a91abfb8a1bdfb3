"""Lookup-table risk classifications for the event detail view.

Every table is evaluated from its highest bound down and the first
satisfied lower bound (inclusive) wins.
"""

from __future__ import annotations

from quake_watch.models import EarthquakeEvent, RiskProfile

_AFTERSHOCK_PROBABILITY = (
    (7.0, "Very High (>90%)"),
    (6.0, "High (70-90%)"),
    (5.0, "Moderate (40-70%)"),
    (4.0, "Low (20-40%)"),
)

_INTENSITY_DESCRIPTIONS = (
    (9.0, "Violent - Considerable damage to specially designed structures"),
    (8.0, "Severe - Considerable damage in ordinary buildings"),
    (7.0, "Very Strong - Negligible damage in buildings of good design"),
    (6.0, "Strong - Felt by all, many frightened"),
    (5.0, "Moderate - Felt by nearly everyone"),
    (4.0, "Light - Felt indoors by many"),
    (3.0, "Weak - Felt quite noticeably by people indoors"),
    (2.0, "Very Weak - Felt only by a few people at rest"),
)

_AFFECTED_AREA = (
    (7.0, "> 200km radius"),
    (6.0, "100-200km radius"),
    (5.0, "50-100km radius"),
)

_BUILDING_DAMAGE = (
    (7.0, "Severe structural damage likely"),
    (6.0, "Moderate structural damage possible"),
    (5.0, "Light damage possible"),
)

_SIGNIFICANCE = (
    (1000, "Exceptionally Significant"),
    (750, "Highly Significant"),
    (500, "Significant"),
    (250, "Moderately Significant"),
)

_MAGNITUDE_CLASSES = (
    (8.0, "Great Earthquake"),
    (7.0, "Major Earthquake"),
    (6.0, "Strong Earthquake"),
    (5.0, "Moderate Earthquake"),
    (4.0, "Light Earthquake"),
)

_MAJOR_QUAKE_ADVICE = (
    "Evacuate buildings if safe to do so",
    "Stay away from windows and exterior walls",
    "Be prepared for aftershocks",
    "Monitor local emergency broadcasts",
    "Check on neighbors if possible",
)
_FELT_QUAKE_ADVICE = (
    "Stay calm and be prepared for aftershocks",
    "Check for building damage",
    "Monitor local news",
)
_MINOR_QUAKE_ADVICE = (
    "No immediate action required",
    "Stay informed of any updates",
)


def _lookup(value: float, table: tuple[tuple[float, str], ...], default: str) -> str:
    for threshold, label in table:
        if value >= threshold:
            return label
    return default


def aftershock_probability(magnitude: float) -> str:
    return _lookup(magnitude, _AFTERSHOCK_PROBABILITY, "Very Low (<20%)")


def intensity_description(mmi: float) -> str:
    """Describe a Modified Mercalli Intensity value."""
    return _lookup(mmi, _INTENSITY_DESCRIPTIONS, "Not Felt")


def risk_level(magnitude: float, depth_km: float) -> str:
    """Combine magnitude and depth into Extreme, High, Moderate or Low.

    The guards overlap; their order decides the result.
    """
    if magnitude >= 7 and depth_km < 70:
        return "Extreme"
    if magnitude >= 6 and depth_km < 100:
        return "High"
    if magnitude >= 5 or (magnitude >= 4 and depth_km < 50):
        return "Moderate"
    return "Low"


def affected_area_radius(magnitude: float) -> str:
    return _lookup(magnitude, _AFFECTED_AREA, "< 50km radius")


def building_damage_risk(magnitude: float) -> str:
    return _lookup(magnitude, _BUILDING_DAMAGE, "Minimal to no damage expected")


def significance_level(significance: int) -> str:
    """Bucket the USGS ``sig`` score."""
    return _lookup(significance, _SIGNIFICANCE, "Low Significance")


def magnitude_classification(magnitude: float) -> str:
    return _lookup(magnitude, _MAGNITUDE_CLASSES, "Minor Earthquake")


def safety_recommendations(magnitude: float) -> list[str]:
    """Return 5 items from M6, 3 items from M4, otherwise 2."""
    if magnitude >= 6:
        return list(_MAJOR_QUAKE_ADVICE)
    if magnitude >= 4:
        return list(_FELT_QUAKE_ADVICE)
    return list(_MINOR_QUAKE_ADVICE)


def assess_risk(event: EarthquakeEvent) -> RiskProfile:
    """Run every classifier for one event."""
    return RiskProfile(
        aftershock_probability=aftershock_probability(event.magnitude),
        risk_level=risk_level(event.magnitude, event.depth_km),
        affected_area_radius=affected_area_radius(event.magnitude),
        building_damage_risk=building_damage_risk(event.magnitude),
        significance_level=significance_level(event.significance),
        magnitude_classification=magnitude_classification(event.magnitude),
        safety_recommendations=tuple(safety_recommendations(event.magnitude)),
        intensity=intensity_description(event.mmi) if event.mmi is not None else None,
    )
