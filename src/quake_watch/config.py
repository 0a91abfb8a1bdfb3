"""Configuration model for the quake-watch service and CLI."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

TimeRange = Literal["1h", "24h", "7d", "14d", "30d"]
SortField = Literal["time", "magnitude", "depth"]
SortDirection = Literal["asc", "desc"]

USGS_API_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"


class QuakeWatchConfig(BaseSettings):
    """All configurable parameters for feed queries and live monitoring.

    Values can be set via constructor arguments, environment variables
    prefixed with QUAKE_WATCH_, or defaults.
    """

    model_config = {"env_prefix": "QUAKE_WATCH_"}

    usgs_api_url: str = Field(
        default=USGS_API_URL, description="USGS FDSN event query endpoint."
    )
    request_timeout: int = Field(
        default=30, ge=5, le=300, description="HTTP request timeout in seconds."
    )
    default_radius_km: float = Field(
        default=100.0, gt=0.0, description="Search radius (km) when none is given."
    )
    default_limit: int = Field(
        default=100, ge=1, le=20000, description="Maximum number of events per query."
    )
    default_time_range: TimeRange = Field(
        default="24h", description="Time range token: 1h, 24h, 7d, 14d or 30d."
    )
    poll_interval_seconds: float = Field(
        default=2.0, gt=0.0, description="Delay between the end of one poll and the next."
    )
    host: str = Field(default="127.0.0.1", description="Bind address for the API server.")
    port: int = Field(default=3000, ge=1, le=65535, description="Port for the API server.")
    cors_origins: list[str] = Field(
        default=["*"], description="Origins allowed to call the API from a browser."
    )
