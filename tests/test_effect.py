"""Tests for the qualitative effect classifier."""

import pytest

from quake_watch.effect import classify_effect, effect_score


class TestEffectScore:
    def test_normalized_at_magnitude_five(self):
        assert effect_score(5.0, 0, 0) == pytest.approx(1.0)

    def test_depth_and_distance_halve_per_100km(self):
        assert effect_score(5.0, 100, 0) == pytest.approx(0.5)
        assert effect_score(5.0, 0, 100) == pytest.approx(0.5)

    def test_magnitude_unit_is_tenfold(self):
        assert effect_score(6.0, 20, 40) == pytest.approx(10 * effect_score(5.0, 20, 40))


class TestClassifyEffect:
    @pytest.mark.parametrize(
        ("magnitude", "depth", "distance", "expected"),
        [
            (7.0, 10, 50, "Very Strong"),
            (6.0, 30, 100, "Strong"),
            (5.0, 50, 200, "Moderate"),
            (4.0, 100, 300, "Light"),
            (3.0, 150, 400, "Minimal"),
        ],
    )
    def test_reference_cases(self, magnitude, depth, distance, expected):
        assert classify_effect(magnitude, depth, distance) == expected

    def test_thresholds_are_inclusive(self):
        assert classify_effect(6.0, 0, 0) == "Very Strong"
        assert classify_effect(5.0, 0, 0) == "Strong"
        assert classify_effect(4.5, 0, 0) == "Moderate"
        assert classify_effect(3.5, 0, 0) == "Light"
        assert classify_effect(2.9, 0, 0) == "Minimal"

    def test_farther_is_never_stronger(self):
        order = ["Minimal", "Light", "Moderate", "Strong", "Very Strong"]
        levels = [order.index(classify_effect(6.5, 10, d)) for d in (0, 50, 200, 1000, 5000)]
        assert levels == sorted(levels, reverse=True)
