"""TileGrid — the 2D tile map the simulation mutates.

Tiles are stored as small integer codes in a NumPy array indexed
``[y, x]``.  Reads never fail: anything outside the map, or never set,
comes back as ``Tile.VOID`` so callers can treat the edge of the world
like any other non-actionable, solid tile.

Writes are recorded in a change log that the simulation drains once per
tick to build the diff it hands to the presentation layer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

import numpy as np
from numpy.typing import NDArray

from tillage.world.tiles import SOLID, Tile

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)

_NEIGHBOURS4 = ((-1, 0), (1, 0), (0, -1), (0, 1))


class TileChange(NamedTuple):
    """A cell whose code changed during a tick."""

    x: int
    y: int
    tile: Tile


@dataclass
class TileGrid:
    """A rectangular map of tile codes.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        tiles: Tile codes indexed as ``tiles[y, x]``.
    """

    width: int
    height: int
    tiles: NDArray[np.int16] = field(init=False, repr=False)
    _changes: dict[tuple[int, int], Tile] = field(
        init=False,
        repr=False,
        default_factory=dict,
    )

    def __post_init__(self) -> None:
        """Start with every cell unset (VOID)."""
        self.tiles = np.full((self.height, self.width), Tile.VOID, dtype=np.int16)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        width: int | None = None,
        height: int | None = None,
    ) -> TileGrid:
        """Build a grid from row-major tile codes (``rows[y][x]``).

        Without an explicit size the grid fits the rows.  Short rows
        leave their missing cells unset; codes beyond the size are
        dropped.
        """
        if height is None:
            height = len(rows)
        if width is None:
            width = max((len(row) for row in rows), default=0)
        grid = cls(width=width, height=height)
        for y, row in enumerate(rows[:height]):
            for x, code in enumerate(row[:width]):
                grid.tiles[y, x] = Tile(code)
        return grid

    @classmethod
    def from_mapping(
        cls,
        width: int,
        height: int,
        cells: Mapping[tuple[int, int], int],
    ) -> TileGrid:
        """Build a grid from sparse ``(x, y) -> code`` entries."""
        grid = cls(width=width, height=height)
        for (x, y), code in cells.items():
            if grid.in_bounds(x, y):
                grid.tiles[y, x] = Tile(code)
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies inside the map."""
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Tile:
        """Return the tile at ``(x, y)``, or ``Tile.VOID`` off the map."""
        if not self.in_bounds(x, y):
            return Tile.VOID
        return Tile(int(self.tiles[y, x]))

    def set(self, x: int, y: int, tile: Tile) -> None:
        """Overwrite the tile at ``(x, y)``.

        No transition checks are made here; the rules decide what is
        legal.  Writes outside the map have nowhere to go and are dropped.
        """
        if not self.in_bounds(x, y):
            logger.debug("dropping write of %s outside map at (%d, %d)", tile.name, x, y)
            return
        if self.tiles[y, x] == tile:
            return
        self.tiles[y, x] = tile
        self._changes[(x, y)] = Tile(tile)

    def is_solid(self, x: int, y: int) -> bool:
        """Return True if the tile at ``(x, y)`` blocks movement."""
        return self.get(x, y) in SOLID

    def neighbours4(self, x: int, y: int) -> list[tuple[int, int]]:
        """Return the four cardinal neighbour coordinates.

        Off-map neighbours are included; they simply read as VOID.
        """
        return [(x + dx, y + dy) for dx, dy in _NEIGHBOURS4]

    def fill(self, tile: Tile) -> None:
        """Set every cell to ``tile`` without recording changes."""
        self.tiles[:, :] = tile

    def count(self, tile: Tile) -> int:
        """Return how many cells currently hold ``tile``."""
        return int(np.count_nonzero(self.tiles == tile))

    def drain_changes(self) -> list[TileChange]:
        """Return and clear the cells written since the last drain."""
        changes = [TileChange(x, y, tile) for (x, y), tile in self._changes.items()]
        self._changes.clear()
        return changes

    def cells(self) -> Iterable[tuple[int, int, Tile]]:
        """Yield ``(x, y, tile)`` for every in-bounds cell."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, Tile(int(self.tiles[y, x]))

    def layout_field(
        self,
        rng: Generator,
        *,
        rock_count: int = 6,
    ) -> None:
        """Lay out a playable field for running without a map asset.

        A rock border surrounds a farm interior with a few rocks
        scattered inside it.

        Args:
            rng: Seeded random generator.
            rock_count: Number of interior rocks to scatter.
        """
        self.fill(Tile.FARM)
        self.tiles[0, :] = Tile.ROCK
        self.tiles[-1, :] = Tile.ROCK
        self.tiles[:, 0] = Tile.ROCK
        self.tiles[:, -1] = Tile.ROCK
        if self.width <= 2 or self.height <= 2:
            return
        for _ in range(rock_count):
            x = int(rng.integers(1, self.width - 1))
            y = int(rng.integers(1, self.height - 1))
            self.tiles[y, x] = Tile.ROCK
