"""Shared HTTP session with retry/backoff."""

from __future__ import annotations

from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from quake_watch import __version__

USER_AGENT = f"quake-watch/{__version__}"


def create_session(
    retries: int = 3,
    backoff_factor: float = 0.5,
    status_forcelist: tuple[int, ...] = (429, 500, 502, 503, 504),
) -> Session:
    """Create a requests Session for the USGS feed.

    Retries idempotent GETs on throttling and server errors with
    exponential backoff (0s, 0.5s, 1s for the defaults). After the last
    retry the final response is returned as-is, so callers still see the
    status through ``raise_for_status``.
    """
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session = Session()
    session.headers["User-Agent"] = USER_AGENT
    session.headers["Accept"] = "application/geo+json, application/json"
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session
