"""Player — the farmer whose position drives the harvest pass.

Position is kept in world pixels.  In real-time play it moves
continuously; in turn-based play it hops from tile centre to tile
centre.  The body is a square slightly smaller than one tile, so it can
straddle up to four tiles at once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from tillage.player.stats import NumStat

if TYPE_CHECKING:
    from tillage.world.grid import TileGrid

# Half the body width, in tiles.
_HALF_BODY = 0.5 * 0.95


class Direction(Enum):
    """Movement direction the player last committed to."""

    NONE = (0, 0)
    UP = (0, -1)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


@dataclass
class Player:
    """The player and its stats.

    Attributes:
        x: Horizontal position in world pixels.
        y: Vertical position in world pixels.
        health: Hit points; the game is lost when depleted.
        food: Carrots harvested so far.
        last_direction: Most recent direction the player moved in.
    """

    x: float
    y: float
    health: NumStat = field(default_factory=lambda: NumStat(100.0, 100.0))
    food: NumStat = field(default_factory=lambda: NumStat(0.0, 1000.0))
    last_direction: Direction = Direction.NONE

    def tile(self, tile_size: int) -> tuple[int, int]:
        """Return the tile containing the player's centre."""
        return (math.floor(self.x / tile_size), math.floor(self.y / tile_size))

    def footprint_tiles(self, tile_size: int) -> list[tuple[int, int]]:
        """Return the tiles under the four corners of the player's body."""
        return self._corners(self.x, self.y, tile_size)

    def move_to(self, x: float, y: float) -> None:
        """Place the player at a new position.  No simulation side effects."""
        self.x = x
        self.y = y

    def walk(
        self,
        dx: float,
        dy: float,
        dt: float,
        grid: TileGrid,
        tile_size: int,
        speed: float,
    ) -> None:
        """Move continuously along ``(dx, dy)`` for ``dt`` seconds.

        Diagonal input is normalised so the player never moves faster
        than ``speed``.  Each axis is blocked on its own when the body
        would overlap a solid tile, which lets the player slide along
        walls.

        Args:
            dx: Horizontal input (-1, 0 or 1).
            dy: Vertical input (-1, 0 or 1).
            dt: Elapsed time in seconds.
            grid: Map used for collision.
            tile_size: Tile width/height in pixels.
            speed: Movement speed in pixels per second.
        """
        if dx == 0 and dy == 0:
            return
        magnitude = speed / math.hypot(dx, dy)
        step_x = dx * magnitude * dt
        step_y = dy * magnitude * dt

        if step_x and not self._blocked(self.x + step_x, self.y, grid, tile_size):
            self.x += step_x
        if step_y and not self._blocked(self.x, self.y + step_y, grid, tile_size):
            self.y += step_y

        if dx < 0:
            self.last_direction = Direction.LEFT
        elif dx > 0:
            self.last_direction = Direction.RIGHT
        elif dy < 0:
            self.last_direction = Direction.UP
        else:
            self.last_direction = Direction.DOWN

    def step(self, direction: Direction, grid: TileGrid, tile_size: int) -> bool:
        """Hop one tile in ``direction``, landing on the tile centre.

        Returns:
            True if the player moved; False if the target tile is solid.
        """
        if direction is Direction.NONE:
            return False
        self.last_direction = direction
        tx, ty = self.tile(tile_size)
        tx += direction.dx
        ty += direction.dy
        if grid.is_solid(tx, ty):
            return False
        self.x = (tx + 0.5) * tile_size
        self.y = (ty + 0.5) * tile_size
        return True

    @staticmethod
    def _corners(x: float, y: float, tile_size: int) -> list[tuple[int, int]]:
        left = math.floor(x / tile_size - _HALF_BODY)
        right = math.floor(x / tile_size + _HALF_BODY)
        up = math.floor(y / tile_size - _HALF_BODY)
        down = math.floor(y / tile_size + _HALF_BODY)
        return [(left, up), (right, up), (left, down), (right, down)]

    def _blocked(self, x: float, y: float, grid: TileGrid, tile_size: int) -> bool:
        return any(grid.is_solid(tx, ty) for tx, ty in self._corners(x, y, tile_size))
