"""Tests for time-range resolution and location query assembly."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from quake_watch.feed import (
    TIME_RANGES,
    build_location_query,
    infer_time_range,
    resolve_time_window,
)
from quake_watch.models import ObserverLocation, TimeWindow

NOW = datetime(2024, 4, 18, 12, 0, tzinfo=timezone.utc)


class TestResolveTimeWindow:
    @pytest.mark.parametrize(
        ("token", "span"),
        [
            ("1h", timedelta(hours=1)),
            ("24h", timedelta(days=1)),
            ("7d", timedelta(days=7)),
            ("14d", timedelta(days=14)),
            ("30d", timedelta(days=30)),
        ],
    )
    def test_known_tokens(self, token, span):
        window = resolve_time_window(token, NOW)
        assert window.end == NOW
        assert window.start == NOW - span

    def test_unknown_token_falls_back_to_24h(self):
        assert resolve_time_window("90d", NOW) == resolve_time_window("24h", NOW)

    def test_defaults_to_current_utc_time(self):
        window = resolve_time_window("1h")
        assert window.end.tzinfo is not None
        assert abs(datetime.now(timezone.utc) - window.end) < timedelta(minutes=1)

    def test_token_table(self):
        assert set(TIME_RANGES) == {"1h", "24h", "7d", "14d", "30d"}


class TestInferTimeRange:
    @pytest.mark.parametrize(
        ("span", "expected"),
        [
            (timedelta(minutes=30), "1h"),
            (timedelta(hours=1), "1h"),
            (timedelta(hours=5), "24h"),
            (timedelta(days=3), "7d"),
            (timedelta(days=7), "7d"),
            (timedelta(days=10), "14d"),
            (timedelta(days=20), "30d"),
            (timedelta(days=90), "30d"),
        ],
    )
    def test_span_to_token(self, span, expected):
        assert infer_time_range(NOW - span, NOW) == expected

    def test_reversed_span(self):
        assert infer_time_range(NOW, NOW - timedelta(hours=5)) == "24h"


class TestBuildLocationQuery:
    def test_parameters(self):
        window = TimeWindow(start=NOW - timedelta(days=1), end=NOW)
        params = build_location_query(ObserverLocation(13.7563, 100.5018), 250.0, window, 50)
        assert params == {
            "format": "geojson",
            "latitude": 13.7563,
            "longitude": 100.5018,
            "maxradiuskm": 250.0,
            "starttime": "2024-04-17T12:00:00.000Z",
            "endtime": "2024-04-18T12:00:00.000Z",
            "limit": 50,
        }

    def test_radius_and_limit_passed_verbatim(self):
        window = resolve_time_window("1h", NOW)
        params = build_location_query(ObserverLocation(0, 0), -5, window, 0)
        assert params["maxradiuskm"] == -5
        assert params["limit"] == 0

    def test_naive_instants_treated_as_utc(self):
        window = TimeWindow(start=datetime(2024, 1, 1), end=datetime(2024, 1, 2))
        params = build_location_query(ObserverLocation(0, 0), 10, window, 1)
        assert params["starttime"] == "2024-01-01T00:00:00.000Z"

    def test_other_offsets_converted_to_utc(self):
        bangkok_tz = timezone(timedelta(hours=7))
        window = TimeWindow(
            start=datetime(2024, 4, 18, 7, 0, tzinfo=bangkok_tz),
            end=datetime(2024, 4, 18, 19, 0, tzinfo=bangkok_tz),
        )
        params = build_location_query(ObserverLocation(0, 0), 10, window, 1)
        assert params["starttime"] == "2024-04-18T00:00:00.000Z"
        assert params["endtime"] == "2024-04-18T12:00:00.000Z"
