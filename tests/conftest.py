"""Shared fixtures for quake_watch tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quake_watch.models import EarthquakeEvent, ObserverLocation

FIXTURES_DIR = Path(__file__).parent / "fixtures"

USGS_QUERY_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"


@pytest.fixture
def sample_usgs_response() -> dict:
    return json.loads((FIXTURES_DIR / "usgs_sample.json").read_text())


@pytest.fixture
def bangkok() -> ObserverLocation:
    return ObserverLocation(latitude=13.7563, longitude=100.5018)


@pytest.fixture
def sample_events() -> list[EarthquakeEvent]:
    """Pre-built events in feed order (newest first)."""
    return [
        EarthquakeEvent(
            id="us7000m9g4",
            magnitude=6.1,
            depth_km=10.0,
            latitude=20.12,
            longitude=99.61,
            time_ms=1713440000000,
            place="45 km SW of Tachileik, Myanmar",
            alert="yellow",
            mmi=6.4,
            significance=640,
        ),
        EarthquakeEvent(
            id="us7000m9f1",
            magnitude=4.4,
            depth_km=35.0,
            latitude=9.9,
            longitude=96.8,
            time_ms=1713420000000,
            place="Andaman Sea",
            significance=298,
        ),
        EarthquakeEvent(
            id="us7000m9d7",
            magnitude=3.2,
            depth_km=8.5,
            latitude=20.02,
            longitude=99.83,
            time_ms=1713380000000,
            place="12 km N of Chiang Rai, Thailand",
            significance=158,
        ),
    ]
