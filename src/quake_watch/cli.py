"""CLI interface using Typer."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Annotated

import typer
import uvicorn
from requests import RequestException, Session
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from quake_watch import __version__
from quake_watch.config import QuakeWatchConfig, SortDirection, SortField, TimeRange
from quake_watch.feed import resolve_time_window
from quake_watch.fetchers.usgs import fetch_events
from quake_watch.geo import REGIONS, find_region
from quake_watch.http import create_session
from quake_watch.models import EarthquakeEvent, EffectLevel, NewEventAlert, ObserverLocation
from quake_watch.monitor import Fetcher, LiveMonitor, NotificationPermission
from quake_watch.pipeline import build_view, filter_events, sort_events

app = typer.Typer(
    name="quake-watch",
    help="Recent earthquakes around a location, with arrival and effect estimates.",
    add_completion=False,
)
console = Console()

EFFECT_STYLES: dict[EffectLevel, str] = {
    "Very Strong": "bold red",
    "Strong": "dark_orange",
    "Moderate": "yellow",
    "Light": "blue",
    "Minimal": "dim",
}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"quake-watch {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )


def _resolve_observer(
    latitude: float | None,
    longitude: float | None,
    region: str | None,
) -> ObserverLocation:
    if region is not None:
        try:
            preset = find_region(region)
        except KeyError:
            names = ", ".join(r.name for r in REGIONS)
            raise typer.BadParameter(
                f"unknown region {region!r} (choose from {names})", param_hint="--region"
            ) from None
        return ObserverLocation(preset.latitude, preset.longitude)
    if latitude is None or longitude is None:
        raise typer.BadParameter("give --lat and --lon, or --region")
    if not -90 <= latitude <= 90:
        raise typer.BadParameter("must be between -90 and 90", param_hint="--lat")
    if not -180 <= longitude <= 180:
        raise typer.BadParameter("must be between -180 and 180", param_hint="--lon")
    return ObserverLocation(latitude, longitude)


def _format_time(time_ms: int) -> str:
    return datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Quake Watch: USGS earthquakes near you, with derived metrics."""


@app.command()
def query(
    lat: Annotated[float | None, typer.Option("--lat", help="Observer latitude.")] = None,
    lon: Annotated[float | None, typer.Option("--lon", help="Observer longitude.")] = None,
    region: Annotated[
        str | None, typer.Option("--region", "-r", help="Preset region instead of --lat/--lon.")
    ] = None,
    radius: Annotated[
        float | None, typer.Option("--radius", help="Search radius in km.", min=0.001)
    ] = None,
    time_range: Annotated[
        TimeRange | None, typer.Option("--time-range", "-t", help="1h, 24h, 7d, 14d or 30d.")
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", help="Maximum events to fetch.", min=1)
    ] = None,
    min_magnitude: Annotated[
        float | None, typer.Option("--min-magnitude", "-m", help="Hide smaller events.")
    ] = None,
    search: Annotated[
        str | None, typer.Option("--search", "-s", help="Only places containing this text.")
    ] = None,
    sort: Annotated[
        SortField, typer.Option("--sort", help="Sort by time, magnitude or depth.")
    ] = "time",
    direction: Annotated[
        SortDirection, typer.Option("--direction", help="desc or asc.")
    ] = "desc",
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")
    ] = False,
) -> None:
    """Fetch recent earthquakes once and show them with derived metrics."""
    _configure_logging(verbose)
    config = QuakeWatchConfig()
    observer = _resolve_observer(lat, lon, region)
    token = time_range or config.default_time_range

    try:
        events = fetch_events(
            observer,
            radius or config.default_radius_km,
            resolve_time_window(token),
            limit=limit or config.default_limit,
            url=config.usgs_api_url,
            timeout=config.request_timeout,
        )
    except (RequestException, ValueError) as exc:
        console.print(f"[red]Failed to fetch earthquake data:[/red] {exc}")
        raise typer.Exit(code=1) from None

    events = sort_events(filter_events(events, min_magnitude, search), sort, direction)
    if not events:
        console.print("[yellow]No earthquakes found for this location and time range.[/yellow]")
        raise typer.Exit()

    table = Table(title=f"Earthquakes within {radius or config.default_radius_km:g} km ({token})")
    table.add_column("Time", style="dim")
    table.add_column("Mag", justify="right", style="bold")
    table.add_column("Place")
    table.add_column("Depth", justify="right")
    table.add_column("Distance", justify="right")
    table.add_column("Effect")
    table.add_column("P-wave")
    table.add_column("S-wave")

    for eq, metrics in build_view(events, observer):
        table.add_row(
            _format_time(eq.time_ms),
            f"{eq.magnitude:.1f}",
            eq.place,
            f"{eq.depth_km:.1f} km",
            f"{metrics.distance_km:.0f} km",
            f"[{EFFECT_STYLES[metrics.effect]}]{metrics.effect}[/]",
            metrics.arrival.p_wave.formatted,
            metrics.arrival.s_wave.formatted,
        )

    console.print(table)
    console.print(f"Total earthquakes: {len(events)}")


class ConsoleSignals:
    """Print monitor signals to the console."""

    def on_monitoring_state_changed(self, enabled: bool) -> None:
        if enabled:
            console.print("[green]Live monitoring started.[/green] Press Ctrl+C to stop.")
        else:
            console.print("[yellow]Live monitoring stopped.[/yellow]")

    def on_new_event(self, alert: NewEventAlert) -> None:
        eq = alert.event
        console.print(
            f"[bold red]New earthquake[/bold red] M{eq.magnitude:.1f} {eq.place} "
            f"({alert.distance_km:.0f} km away) "
            f"P-wave {alert.arrival.p_wave.formatted}, S-wave {alert.arrival.s_wave.formatted}"
        )

    def on_error(self, error: Exception) -> None:
        console.print(f"[red]Poll failed:[/red] {error}")

    def on_info(self, message: str) -> None:
        console.print(f"[dim]{message}[/dim]")


class ConsoleNotifier:
    """Terminal stand-in for desktop notifications; always permitted."""

    def permission(self) -> NotificationPermission:
        return "granted"

    def request_permission(self) -> NotificationPermission:
        return "granted"

    def notify(self, title: str, body: str) -> None:
        console.print(Panel(body, title=title, border_style="red"))


async def _watch(monitor: LiveMonitor, time_range: str) -> None:
    monitor.enable(time_range)
    try:
        await asyncio.Event().wait()
    finally:
        monitor.disable()


def _make_fetcher(
    config: QuakeWatchConfig,
    session: Session,
    observer: ObserverLocation,
    radius_km: float,
    time_range: str,
    limit: int,
) -> Fetcher:
    async def fetch() -> list[EarthquakeEvent]:
        return await asyncio.to_thread(
            fetch_events,
            observer,
            radius_km,
            resolve_time_window(time_range),
            limit,
            config.usgs_api_url,
            config.request_timeout,
            session,
        )

    return fetch


@app.command()
def watch(
    lat: Annotated[float | None, typer.Option("--lat", help="Observer latitude.")] = None,
    lon: Annotated[float | None, typer.Option("--lon", help="Observer longitude.")] = None,
    region: Annotated[
        str | None, typer.Option("--region", "-r", help="Preset region instead of --lat/--lon.")
    ] = None,
    radius: Annotated[
        float | None, typer.Option("--radius", help="Search radius in km.", min=0.001)
    ] = None,
    time_range: Annotated[
        TimeRange | None, typer.Option("--time-range", "-t", help="1h, 24h, 7d, 14d or 30d.")
    ] = None,
    interval: Annotated[
        float | None, typer.Option("--interval", help="Seconds between polls.", min=0.1)
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")
    ] = False,
) -> None:
    """Poll the feed and announce each new most-recent earthquake."""
    _configure_logging(verbose)
    config = QuakeWatchConfig()
    observer = _resolve_observer(lat, lon, region)
    token = time_range or config.default_time_range
    session = create_session()

    monitor = LiveMonitor(
        fetch=_make_fetcher(
            config,
            session,
            observer,
            radius or config.default_radius_km,
            token,
            config.default_limit,
        ),
        observer=observer,
        signals=ConsoleSignals(),
        notifier=ConsoleNotifier(),
        poll_interval=interval or config.poll_interval_seconds,
    )

    try:
        asyncio.run(_watch(monitor, token))
    except KeyboardInterrupt:
        pass
    finally:
        session.close()


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address.")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port to listen on.")] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")
    ] = False,
) -> None:
    """Run the HTTP proxy API."""
    _configure_logging(verbose)
    config = QuakeWatchConfig()
    uvicorn.run(
        "quake_watch.api:app",
        host=host or config.host,
        port=port or config.port,
        log_level="debug" if verbose else "info",
    )


@app.command()
def regions() -> None:
    """List preset observer regions."""
    table = Table(title="Preset regions")
    table.add_column("Name", style="bold")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")
    for r in REGIONS:
        table.add_row(r.name, f"{r.latitude:.4f}", f"{r.longitude:.4f}")
    console.print(table)
