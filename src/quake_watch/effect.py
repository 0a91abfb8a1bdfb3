"""Qualitative shaking effect at the observer."""

from __future__ import annotations

from quake_watch.models import EffectLevel

# (minimum score, level), highest first
_EFFECT_THRESHOLDS: tuple[tuple[float, EffectLevel], ...] = (
    (10.0, "Very Strong"),
    (1.0, "Strong"),
    (0.1, "Moderate"),
    (0.01, "Light"),
)


def effect_score(magnitude: float, depth_km: float, distance_km: float) -> float:
    """Continuous decay score, 1.0 for M5 at zero depth and zero distance.

    Each magnitude unit scales the score tenfold; depth and distance each
    halve it per 100 km.
    """
    magnitude_factor = 10 ** (magnitude - 5)
    depth_factor = 1 / (1 + depth_km / 100)
    distance_factor = 1 / (1 + distance_km / 100)
    return magnitude_factor * depth_factor * distance_factor


def classify_effect(magnitude: float, depth_km: float, distance_km: float) -> EffectLevel:
    """Bucket ``effect_score`` into Minimal, Light, Moderate, Strong or Very Strong."""
    score = effect_score(magnitude, depth_km, distance_km)
    for threshold, level in _EFFECT_THRESHOLDS:
        if score >= threshold:
            return level
    return "Minimal"
