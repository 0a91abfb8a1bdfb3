"""Quake Watch: USGS feed proxy, derived earthquake metrics and live monitoring."""

__version__ = "0.1.0"
