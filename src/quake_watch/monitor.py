"""Live monitoring: poll the feed and announce each new feed head once.

The monitor is a two-state machine (disabled / polling) driven by a
``Scheduler``. Polls are strictly sequential: the next tick is scheduled
``poll_interval`` seconds after the previous poll finished, whatever its
outcome. Every scheduled tick carries the generation it was scheduled
under; ``disable`` bumps the generation and cancels the pending tick, so
nothing scheduled before the transition can fetch afterwards.

Errors raised while fetching or announcing, including by signal
receivers and the notifier, are reported through ``on_error`` and
polling continues. A failed notification still marks the event as seen.

A fetch that never returns stalls the loop. Timeouts belong to the
fetch callable (see ``fetch_feed``'s ``timeout``).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Literal, Protocol

from quake_watch.arrival import arrival_times
from quake_watch.geo import distance_km
from quake_watch.models import (
    EarthquakeEvent,
    LiveMonitorState,
    NewEventAlert,
    ObserverLocation,
)

logger = logging.getLogger(__name__)

NotificationPermission = Literal["granted", "denied", "default"]
Fetcher = Callable[[], Awaitable[list[EarthquakeEvent]]]

NOTIFICATION_TITLE = "New Earthquake Detected!"
UNSUPPORTED_MESSAGE = "This platform does not support desktop notifications"
PERMISSION_MESSAGE = "Please enable notifications to receive earthquake alerts."


class MonitorSignals(Protocol):
    """Receiver for everything the monitor reports. Called synchronously."""

    def on_monitoring_state_changed(self, enabled: bool) -> None: ...

    def on_new_event(self, alert: NewEventAlert) -> None: ...

    def on_error(self, error: Exception) -> None: ...

    def on_info(self, message: str) -> None: ...


class Notifier(Protocol):
    """Platform notification channel."""

    def permission(self) -> NotificationPermission: ...

    def request_permission(self) -> NotificationPermission: ...

    def notify(self, title: str, body: str) -> None: ...


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask: ...


class AsyncioScheduler:
    """Scheduler backed by the running event loop's ``call_later``."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        return asyncio.get_running_loop().call_later(delay, callback)


def check_for_new_event(
    events: list[EarthquakeEvent],
    last_seen_id: str | None,
    observer: ObserverLocation,
) -> tuple[NewEventAlert | None, str | None]:
    """Decide whether the feed head is new.

    Only ``events[0]`` is inspected; several new events between polls
    surface as the newest one alone. Returns ``(alert, last_seen_id)``,
    with ``alert`` None and the id unchanged when there is nothing new.
    """
    if not events:
        return None, last_seen_id

    head = events[0]
    if head.id == last_seen_id:
        return None, last_seen_id

    distance = distance_km(observer.latitude, observer.longitude, head.latitude, head.longitude)
    alert = NewEventAlert(event=head, distance_km=distance, arrival=arrival_times(distance))
    return alert, head.id


def notification_body(alert: NewEventAlert) -> str:
    eq = alert.event
    return (
        f"Magnitude {eq.magnitude:g} earthquake detected.\n"
        f"Location: {eq.place}\n"
        f"P-wave arrival: {alert.arrival.p_wave.formatted}\n"
        f"S-wave arrival: {alert.arrival.s_wave.formatted}"
    )


class LiveMonitor:
    """Owns one ``LiveMonitorState`` and the poll loop that mutates it."""

    def __init__(
        self,
        fetch: Fetcher,
        observer: ObserverLocation,
        signals: MonitorSignals,
        notifier: Notifier | None = None,
        scheduler: Scheduler | None = None,
        poll_interval: float = 2.0,
    ) -> None:
        self._fetch = fetch
        self._observer = observer
        self._signals = signals
        self._notifier = notifier
        self._scheduler = scheduler or AsyncioScheduler()
        self._poll_interval = poll_interval

        self._state = LiveMonitorState()
        self._generation = 0
        self._pending: ScheduledTask | None = None
        self._in_flight = False
        self._task: asyncio.Task[None] | None = None

    @property
    def enabled(self) -> bool:
        return self._state.enabled

    @property
    def last_seen_event_id(self) -> str | None:
        return self._state.last_seen_event_id

    @property
    def previous_time_range(self) -> str | None:
        return self._state.previous_time_range

    @property
    def poll_in_flight(self) -> bool:
        return self._in_flight

    def enable(self, current_time_range: str | None = None) -> None:
        """Start polling, remembering the time range to restore on stop."""
        if self._state.enabled:
            return
        self._state = LiveMonitorState(enabled=True, previous_time_range=current_time_range)
        self._generation += 1
        logger.info("Live monitoring started (poll interval %.1fs)", self._poll_interval)

        self._ensure_notification_permission()
        self._signals.on_monitoring_state_changed(True)
        self._schedule(0.0)

    def disable(self) -> str | None:
        """Stop polling and return the time range captured by ``enable``."""
        if not self._state.enabled:
            return None
        restore = self._state.previous_time_range
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._state = LiveMonitorState()
        logger.info("Live monitoring stopped")

        self._signals.on_monitoring_state_changed(False)
        return restore

    def toggle(self, current_time_range: str | None = None) -> str | None:
        if self._state.enabled:
            return self.disable()
        self.enable(current_time_range)
        return None

    def process_events(self, events: list[EarthquakeEvent]) -> NewEventAlert | None:
        """Run the new-event check against the current state and announce a hit."""
        alert, last_seen = check_for_new_event(
            events, self._state.last_seen_event_id, self._observer
        )
        if alert is None:
            return None

        logger.info(
            "New earthquake %s: M%.1f %s (%.0f km)",
            alert.event.id,
            alert.event.magnitude,
            alert.event.place,
            alert.distance_km,
        )
        self._signals.on_new_event(alert)
        self._notify(alert)
        self._state.last_seen_event_id = last_seen
        return alert

    def _notify(self, alert: NewEventAlert) -> None:
        if self._notifier is None or self._notifier.permission() != "granted":
            return
        try:
            self._notifier.notify(NOTIFICATION_TITLE, notification_body(alert))
        except Exception as exc:
            logger.warning("Desktop notification failed: %s", exc)
            self._signals.on_error(exc)

    def _ensure_notification_permission(self) -> None:
        if self._notifier is None:
            self._signals.on_info(UNSUPPORTED_MESSAGE)
            return
        if self._notifier.permission() in ("granted", "denied"):
            return
        if self._notifier.request_permission() != "granted":
            self._signals.on_info(PERMISSION_MESSAGE)

    def _schedule(self, delay: float) -> None:
        generation = self._generation
        self._pending = self._scheduler.call_later(delay, lambda: self._on_tick(generation))

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation or not self._state.enabled:
            return
        self._pending = None
        if self._in_flight:
            logger.debug("Poll still in flight, skipping tick")
            return
        self._task = asyncio.get_running_loop().create_task(self._poll(generation))

    async def _poll(self, generation: int) -> None:
        self._in_flight = True
        try:
            events = await self._fetch()
            if generation == self._generation:
                self.process_events(events)
        except Exception as exc:
            if generation == self._generation:
                logger.warning("Live poll failed: %s", exc)
                self._signals.on_error(exc)
        finally:
            self._in_flight = False
            if self._state.enabled and self._pending is None:
                self._schedule(self._poll_interval)
