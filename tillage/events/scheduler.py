"""Event schedulers — queues of delayed, tile-keyed world mutations.

Two schedulers share one interface so the simulation can pick the one
that matches how the host drives it:

- ``TimedScheduler`` for real-time play.  Due times are continuous
  (milliseconds by default), any number of events may target the same
  tile, and due events come back sorted by due time with ties in
  scheduling order.
- ``TurnScheduler`` for turn-based play.  Due values are turn numbers
  and each tile holds at most one pending event: scheduling again on a
  tile replaces whatever was there.

Neither validates coordinates.  An event aimed off the map is kept and
returned like any other; the rules no-op on VOID tiles.
"""

from __future__ import annotations

import bisect
import logging
import math
from itertools import count
from typing import Protocol

from tillage.events.types import EventKind, ScheduledEvent

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Interface the simulation relies on."""

    now: float

    def set_clock(self, now: float) -> None: ...

    def schedule(
        self,
        kind: EventKind,
        x: int,
        y: int,
        delay: float,
    ) -> ScheduledEvent: ...

    def cancel(self, x: int, y: int) -> int: ...

    def has_pending(self, x: int, y: int) -> bool: ...

    def peek_kind(self, x: int, y: int) -> EventKind | None: ...

    def advance(self, now: float) -> list[ScheduledEvent]: ...

    def pending(self) -> list[ScheduledEvent]: ...

    def __len__(self) -> int: ...


class TimedScheduler:
    """Continuous-time scheduler backed by a sorted list."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now
        self._queue: list[tuple[float, int, ScheduledEvent]] = []
        self._seq = count()

    def set_clock(self, now: float) -> None:
        """Move the clock used to turn delays into due times."""
        if now < self.now:
            logger.warning("clock moved backwards (%s -> %s); ignoring", self.now, now)
            return
        self.now = now

    def schedule(
        self,
        kind: EventKind,
        x: int,
        y: int,
        delay: float,
    ) -> ScheduledEvent:
        """Queue ``kind`` on ``(x, y)`` to fire ``delay`` after the clock.

        Returns:
            The queued event.
        """
        seq = next(self._seq)
        event = ScheduledEvent(kind=kind, x=x, y=y, due=self.now + delay, seq=seq)
        bisect.insort(self._queue, (event.due, seq, event))
        return event

    def cancel(self, x: int, y: int) -> int:
        """Drop every pending event on ``(x, y)``; return how many went."""
        before = len(self._queue)
        self._queue = [entry for entry in self._queue if entry[2].key != (x, y)]
        return before - len(self._queue)

    def has_pending(self, x: int, y: int) -> bool:
        return any(entry[2].key == (x, y) for entry in self._queue)

    def peek_kind(self, x: int, y: int) -> EventKind | None:
        """Return the kind of the earliest pending event on ``(x, y)``."""
        for _, _, event in self._queue:
            if event.key == (x, y):
                return event.kind
        return None

    def advance(self, now: float) -> list[ScheduledEvent]:
        """Remove and return every event due at or before ``now``.

        Events come back in ascending due order, ties in scheduling
        order.  Anything scheduled while the caller processes them is
        left for a later call.
        """
        self.set_clock(now)
        cut = bisect.bisect_right(self._queue, (self.now, math.inf))
        due = [event for _, _, event in self._queue[:cut]]
        del self._queue[:cut]
        return due

    def pending(self) -> list[ScheduledEvent]:
        """Return queued events in firing order without removing them."""
        return [event for _, _, event in self._queue]

    def __len__(self) -> int:
        return len(self._queue)


class TurnScheduler:
    """Discrete-turn scheduler holding at most one event per tile.

    Scheduling on a tile that already has a pending event silently
    replaces it.  That is how a newer effect pre-empts an older one on
    the same tile.
    """

    def __init__(self, now: int = 0) -> None:
        self.now = now
        self._slots: dict[tuple[int, int], ScheduledEvent] = {}
        self._seq = count()

    def set_clock(self, now: float) -> None:
        """Move the current turn."""
        if now < self.now:
            logger.warning("turn moved backwards (%s -> %s); ignoring", self.now, now)
            return
        self.now = now

    def schedule(
        self,
        kind: EventKind,
        x: int,
        y: int,
        delay: float,
    ) -> ScheduledEvent:
        """Put ``kind`` in the slot for ``(x, y)``, ``delay`` turns ahead."""
        event = ScheduledEvent(
            kind=kind,
            x=x,
            y=y,
            due=self.now + delay,
            seq=next(self._seq),
        )
        replaced = self._slots.pop((x, y), None)
        if replaced is not None:
            logger.debug(
                "%s on (%d, %d) replaces pending %s",
                kind.name,
                x,
                y,
                replaced.kind.name,
            )
        self._slots[(x, y)] = event
        return event

    def cancel(self, x: int, y: int) -> int:
        return 1 if self._slots.pop((x, y), None) is not None else 0

    def has_pending(self, x: int, y: int) -> bool:
        return (x, y) in self._slots

    def peek_kind(self, x: int, y: int) -> EventKind | None:
        event = self._slots.get((x, y))
        return event.kind if event is not None else None

    def advance(self, now: float) -> list[ScheduledEvent]:
        """Drain every slot due at or before turn ``now``.

        Order follows when each slot was last scheduled.  Rules must not
        depend on the order between different tiles.
        """
        self.set_clock(now)
        due = [event for event in self._slots.values() if event.due <= self.now]
        for event in due:
            del self._slots[event.key]
        return due

    def pending(self) -> list[ScheduledEvent]:
        return list(self._slots.values())

    def __len__(self) -> int:
        return len(self._slots)


def make_scheduler(mode: str) -> Scheduler:
    """Build the scheduler for a simulation mode.

    Raises:
        ValueError: If ``mode`` is neither ``"realtime"`` nor ``"turn"``.
    """
    if mode == "realtime":
        return TimedScheduler()
    if mode == "turn":
        return TurnScheduler()
    msg = f"unknown simulation mode {mode!r}"
    raise ValueError(msg)
