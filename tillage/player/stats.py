"""NumStat — a bounded numeric resource such as health or food."""

from __future__ import annotations

from dataclasses import dataclass

DEPLETED_EPSILON = 1e-5


@dataclass
class NumStat:
    """A level that always stays within ``[0, maximum]``.

    Attributes:
        level: Current amount.
        maximum: Upper bound for ``level``.
    """

    level: float
    maximum: float

    def __post_init__(self) -> None:
        """Clamp the starting level into range."""
        self.level = min(max(self.level, 0.0), self.maximum)

    def increment(self, amount: float) -> None:
        """Add ``amount`` (negative to drain) and clamp to ``[0, maximum]``."""
        self.level = min(max(self.level + amount, 0.0), self.maximum)

    @property
    def is_depleted(self) -> bool:
        """Return True once the level has (almost) run out.

        A small epsilon absorbs floating-point residue from gradual
        drains.
        """
        return self.level <= DEPLETED_EPSILON

    @property
    def fraction(self) -> float:
        """Level as a fraction of the maximum."""
        return self.level / self.maximum if self.maximum > 0 else 0.0
