"""Tile codes — the closed set of materials a grid cell can hold.

Codes are the tileset indices used by the map asset, so a rendered map
and the simulation agree on what each cell is.  ``VOID`` is what the
grid reports for anything outside its bounds or never set.
"""

from __future__ import annotations

from enum import IntEnum


class Tile(IntEnum):
    """Material/state of a single grid cell."""

    VOID = -1
    EMPTY = 0
    GROUND = 1
    FARM = 2
    PLANT = 3
    FLOOR = 4
    CARROT = 5
    ROCK = 6
    ANGER_REAL = 7
    ANGER_WARNING = 8
    TOPRIGHT_WALL = 9
    BOTTOMLEFT_WALL = 10
    BOTTOMRIGHT_WALL = 11
    WORKING_VENT = 12
    BROKEN_VENT = 13
    MOLD = 14


# Tiles the player cannot walk into.
SOLID: frozenset[Tile] = frozenset(
    {
        Tile.VOID,
        Tile.ROCK,
        Tile.TOPRIGHT_WALL,
        Tile.BOTTOMLEFT_WALL,
        Tile.BOTTOMRIGHT_WALL,
        Tile.WORKING_VENT,
        Tile.BROKEN_VENT,
    },
)

# Harvesting turns these back into a growing plant.
REPLANTABLE: frozenset[Tile] = frozenset({Tile.CARROT, Tile.FARM, Tile.MOLD})

# Mold spreads into these.
INFECTABLE: frozenset[Tile] = frozenset({Tile.PLANT, Tile.CARROT})

# Explosions leave these alone.  Unset cells stay unset.
INDESTRUCTIBLE: frozenset[Tile] = frozenset({Tile.VOID, Tile.ROCK})
