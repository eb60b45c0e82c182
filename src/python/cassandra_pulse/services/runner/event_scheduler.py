"""Two-event scheduler driving the runner loop.

Each event keeps its own period and next-due timestamp. The next due
time is always computed from the actual start of the last execution, so
an overrun is absorbed by the following interval instead of piling up.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from cassandra_pulse.models import EventKind, ScheduledEvent

logger = logging.getLogger(__name__)

# Wake up slightly before the due time
SAFETY_MARGIN_SEC = 0.001


class EventScheduler:
    """Orders the topology refresh and health poke events.

    Parameters:
        refresh_period: Seconds between two topology refreshes.
        poke_period: Seconds between two health pokes.
        clock: Monotonic time source; both events are due at its value
            on construction.
    """

    def __init__(
        self,
        refresh_period: float,
        poke_period: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        now = clock()
        self._events: list[ScheduledEvent] = [
            ScheduledEvent(kind=EventKind.TOPOLOGY_REFRESH, period=refresh_period, next_due=now),
            ScheduledEvent(kind=EventKind.HEALTH_POKE, period=poke_period, next_due=now),
        ]
        self._events.sort(key=ScheduledEvent.sort_key)

    @property
    def events(self) -> tuple[ScheduledEvent, ...]:
        return tuple(self._events)

    def next_event(self) -> ScheduledEvent:
        """Return the earliest due event; ties go to the topology refresh."""
        return self._events[0]

    def reschedule(self, event: ScheduledEvent, start: float, duration: float) -> None:
        """Push ``event`` one period after ``start`` and re-sort."""
        if duration >= event.period:
            logger.warning(
                "%s took %.3fs, longer than its %.3fs period. "
                "Please increase the period if you see this message too often",
                event.kind.name,
                duration,
                event.period,
            )
        event.next_due = start + event.period
        self._events.sort(key=ScheduledEvent.sort_key)

    def sleep_duration(self, now: float) -> float:
        """Seconds to wait before the next event. May be zero or negative,
        in which case the caller must not sleep."""
        return self._events[0].next_due - now - SAFETY_MARGIN_SEC
