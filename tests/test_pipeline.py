"""Tests for per-event metrics and list filtering/sorting."""

from __future__ import annotations

from dataclasses import replace

import pytest

from quake_watch.arrival import arrival_times
from quake_watch.geo import distance_km
from quake_watch.models import ObserverLocation
from quake_watch.pipeline import build_view, derive_metrics, filter_events, sort_events


class TestDeriveMetrics:
    def test_components_agree(self, sample_events, bangkok):
        eq = sample_events[0]
        metrics = derive_metrics(eq, bangkok)
        expected = distance_km(bangkok.latitude, bangkok.longitude, eq.latitude, eq.longitude)
        assert metrics.distance_km == pytest.approx(expected)
        assert metrics.arrival == arrival_times(expected)
        assert metrics.effect == "Strong"
        assert metrics.risk.magnitude_classification == "Strong Earthquake"

    def test_observer_at_epicenter(self, sample_events):
        eq = sample_events[1]
        metrics = derive_metrics(eq, ObserverLocation(eq.latitude, eq.longitude))
        assert metrics.distance_km == 0.0
        assert metrics.arrival.p_wave.formatted == "0 seconds"


class TestBuildView:
    def test_keeps_order(self, sample_events, bangkok):
        view = build_view(sample_events, bangkok)
        assert [eq.id for eq, _ in view] == [eq.id for eq in sample_events]

    def test_empty(self, bangkok):
        assert build_view([], bangkok) == []


class TestFilterEvents:
    def test_no_filters(self, sample_events):
        assert filter_events(sample_events) == sample_events

    def test_min_magnitude_inclusive(self, sample_events):
        result = filter_events(sample_events, min_magnitude=4.4)
        assert [eq.id for eq in result] == ["us7000m9g4", "us7000m9f1"]

    def test_place_query_case_insensitive(self, sample_events):
        result = filter_events(sample_events, place_query="THAILAND")
        assert [eq.id for eq in result] == ["us7000m9d7"]

    def test_combined(self, sample_events):
        assert filter_events(sample_events, min_magnitude=5, place_query="thailand") == []


class TestSortEvents:
    def test_time_desc_newest_first(self, sample_events):
        shuffled = [sample_events[2], sample_events[0], sample_events[1]]
        result = sort_events(shuffled, "time", "desc")
        assert [eq.id for eq in result] == ["us7000m9g4", "us7000m9f1", "us7000m9d7"]

    def test_magnitude_asc(self, sample_events):
        result = sort_events(sample_events, "magnitude", "asc")
        assert [eq.magnitude for eq in result] == [3.2, 4.4, 6.1]

    def test_depth_desc_shallowest_first(self, sample_events):
        result = sort_events(sample_events, "depth", "desc")
        assert [eq.depth_km for eq in result] == [8.5, 10.0, 35.0]

    def test_does_not_mutate_input(self, sample_events):
        before = list(sample_events)
        sort_events(sample_events, "magnitude", "asc")
        assert sample_events == before

    def test_unknown_field(self, sample_events):
        with pytest.raises(ValueError):
            sort_events(sample_events, "place")

    def test_unknown_direction(self, sample_events):
        with pytest.raises(ValueError):
            sort_events(sample_events, "time", "sideways")


class TestSortStability:
    def _ties(self, sample_events):
        first, second, third = sample_events
        return [
            replace(first, id="a", magnitude=4.0, depth_km=10.0),
            replace(second, id="b", magnitude=4.0, depth_km=10.0),
            replace(third, id="c", magnitude=5.0, depth_km=20.0),
        ]

    def test_equal_magnitudes_keep_feed_order_ascending(self, sample_events):
        result = sort_events(self._ties(sample_events), "magnitude", "asc")
        assert [eq.id for eq in result] == ["a", "b", "c"]

    def test_equal_magnitudes_keep_feed_order_descending(self, sample_events):
        result = sort_events(self._ties(sample_events), "magnitude", "desc")
        assert [eq.id for eq in result] == ["c", "a", "b"]

    def test_equal_depths_keep_feed_order_ascending(self, sample_events):
        result = sort_events(self._ties(sample_events), "depth", "asc")
        assert [eq.id for eq in result] == ["c", "a", "b"]
