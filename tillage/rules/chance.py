"""Random draws used by the rules.

Every draw takes the generator explicitly so a seeded simulation replays
identically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator


def roll(rng: Generator, probability: float) -> bool:
    """Return True with the given probability."""
    return bool(rng.random() < probability)


def uniform_delay(
    rng: Generator,
    low: float,
    high: float,
    *,
    whole: bool = False,
) -> float:
    """Draw a delay uniformly from ``[low, high]``.

    Args:
        rng: Seeded random generator.
        low: Shortest delay.
        high: Longest delay.
        whole: Draw whole numbers (turns) instead of continuous time.
    """
    if whole:
        return int(rng.integers(int(low), int(high), endpoint=True))
    return low + float(rng.random()) * (high - low)
