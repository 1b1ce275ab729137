"""Event kinds and the scheduled-event record shared by both schedulers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class EventKind(Enum):
    """What a delayed event does when it fires."""

    GROW = auto()
    SPREAD = auto()
    ANGER_WARNING = auto()
    ANGER_REAL = auto()
    ANGER_PASS = auto()
    EXPLOSION = auto()


@dataclass(frozen=True)
class ScheduledEvent:
    """A delayed world mutation keyed by tile.

    Attributes:
        kind: Which rule runs when the event fires.
        x: Tile column the event targets.
        y: Tile row the event targets.
        due: Time (or turn) at or after which the event fires.
        seq: Scheduler-wide insertion counter; breaks ties on ``due``.
    """

    kind: EventKind
    x: int
    y: int
    due: float
    seq: int = 0

    @property
    def key(self) -> tuple[int, int]:
        """The tile coordinate this event is keyed by."""
        return (self.x, self.y)
