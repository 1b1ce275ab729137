"""MoldFront — pending mold-spread checks for real-time play.

Each moldy tile that may still spread holds one entry mapping its
coordinate to the time of its next check.  The simulation sweeps the
front every tick; entries that are not yet due stay put, due entries are
removed and handed back for the spread rule to run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MoldFront:
    """Time-keyed set of tiles waiting to spread mold.

    Attributes:
        checks: Mapping from tile coordinate to the time its spread
            check fires.  One entry per tile; re-adding moves the time.
    """

    checks: dict[tuple[int, int], float] = field(default_factory=dict)

    def add(self, x: int, y: int, due: float) -> None:
        """Schedule (or reschedule) the spread check for ``(x, y)``."""
        self.checks[(x, y)] = due

    def discard(self, x: int, y: int) -> bool:
        """Forget the check for ``(x, y)``; return True if one existed."""
        return self.checks.pop((x, y), None) is not None

    def sweep(self, now: float) -> list[tuple[int, int]]:
        """Remove and return every tile whose check is due by ``now``."""
        due = [key for key, when in self.checks.items() if when <= now]
        for key in due:
            del self.checks[key]
        return due

    def __contains__(self, key: object) -> bool:
        return key in self.checks

    def __len__(self) -> int:
        return len(self.checks)
