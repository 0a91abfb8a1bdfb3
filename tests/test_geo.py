"""Tests for geo.distance_km and the preset regions."""

import pytest

from quake_watch.geo import REGIONS, distance_km, find_region, is_selected_region


class TestDistance:
    def test_zero_distance(self):
        assert distance_km(13.7563, 100.5018, 13.7563, 100.5018) == 0.0

    def test_bangkok_to_chiang_mai(self):
        assert round(distance_km(13.7563, 100.5018, 18.7883, 98.9853)) == 582

    def test_sydney_to_wellington(self):
        assert round(distance_km(-33.8688, 151.2093, -41.2866, 174.7756)) == 2226

    def test_antipodal_points(self):
        d = distance_km(0, 0, 0, 180)
        assert 20010 < d < 20020

    def test_symmetry(self):
        d1 = distance_km(13.7563, 100.5018, -33.8688, 151.2093)
        d2 = distance_km(-33.8688, 151.2093, 13.7563, 100.5018)
        assert d1 == pytest.approx(d2)

    def test_always_non_negative(self):
        assert distance_km(-90, -180, 90, 180) >= 0

    def test_out_of_range_inputs_still_numeric(self):
        assert isinstance(distance_km(120.0, 400.0, 0.0, 0.0), float)


class TestRegions:
    def test_six_presets(self):
        assert [r.name for r in REGIONS] == [
            "Bangkok", "Phuket", "Chiang Mai", "Hua Hin", "Pattaya", "Samui",
        ]

    def test_find_region_ignores_case(self):
        region = find_region("  chiang mai ")
        assert (region.latitude, region.longitude) == (18.7883, 98.9853)

    def test_find_unknown_region(self):
        with pytest.raises(KeyError):
            find_region("Atlantis")

    def test_is_selected_region_within_tolerance(self):
        bkk = find_region("Bangkok")
        assert is_selected_region(13.75635, 100.50175, bkk)
        assert not is_selected_region(13.7573, 100.5018, bkk)
