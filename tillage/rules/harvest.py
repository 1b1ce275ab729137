"""Area interaction pass — what happens around the player every tick.

The set of affected tiles is rebuilt from scratch on every call: the
player moves continuously, so yesterday's circle is not today's.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from tillage.events.types import EventKind
from tillage.rules.chance import uniform_delay
from tillage.world.tiles import REPLANTABLE, Tile

if TYPE_CHECKING:
    from tillage.simulation.engine import Simulation

logger = logging.getLogger(__name__)


def tiles_in_circle(
    cx: float,
    cy: float,
    radius: int,
    tile_size: int,
) -> list[tuple[int, int]]:
    """Return the tiles whose centres lie strictly within a circle.

    Scans the bounding square of tiles around ``(cx, cy)`` and keeps
    those whose centre is closer than ``radius * tile_size`` pixels.

    Args:
        cx: Circle centre, x in world pixels.
        cy: Circle centre, y in world pixels.
        radius: Radius in tiles.
        tile_size: Tile width/height in pixels.

    Returns:
        Tile coordinates, row by row.  May include off-map tiles.
    """
    limit = radius * tile_size
    home_x = math.floor(cx / tile_size)
    home_y = math.floor(cy / tile_size)
    reach = radius + 1

    result: list[tuple[int, int]] = []
    for ty in range(home_y - reach, home_y + reach + 1):
        for tx in range(home_x - reach, home_x + reach + 1):
            centre_x = (tx + 0.5) * tile_size
            centre_y = (ty + 0.5) * tile_size
            if math.hypot(centre_x - cx, centre_y - cy) < limit:
                result.append((tx, ty))
    return result


def harvest(sim: Simulation) -> int:
    """Replant everything replantable around the player.

    Carrots, bare farm and mold within the harvest radius become growing
    plants, each with a freshly drawn growth timer.  Every carrot picked
    adds one food.

    Args:
        sim: The simulation to act on.

    Returns:
        Number of carrots collected.
    """
    cfg = sim.config
    grid = sim.grid
    player = sim.player
    picked = 0

    for tx, ty in tiles_in_circle(player.x, player.y, cfg.harvest_radius, cfg.tile_size):
        tile = grid.get(tx, ty)
        if tile not in REPLANTABLE:
            continue
        grid.set(tx, ty, Tile.PLANT)
        delay = uniform_delay(
            sim.rng,
            cfg.growth_time_min,
            cfg.growth_time_max,
            whole=cfg.turn_based,
        )
        sim.scheduler.schedule(EventKind.GROW, tx, ty, delay)
        if tile is Tile.CARROT:
            player.food.increment(1)
            picked += 1

    return picked


def arm_explosions(sim: Simulation) -> list[tuple[int, int]]:
    """Set off every angry carrot the player has come too close to.

    Each ANGER_REAL tile inside the harvest radius costs the player
    ``explosion_damage`` right away and gets an EXPLOSION due
    immediately, so it goes off in this tick's drain.  Damage is
    taken per carrot, before any blast burns a neighbouring carrot.

    Returns:
        The tiles that were armed.
    """
    cfg = sim.config
    armed: list[tuple[int, int]] = []
    for tx, ty in tiles_in_circle(
        sim.player.x,
        sim.player.y,
        cfg.harvest_radius,
        cfg.tile_size,
    ):
        if sim.grid.get(tx, ty) is Tile.ANGER_REAL:
            sim.player.health.increment(-cfg.explosion_damage)
            sim.scheduler.schedule(EventKind.EXPLOSION, tx, ty, 0)
            armed.append((tx, ty))
    if armed:
        logger.debug("armed %d explosion(s) near the player", len(armed))
    return armed


def mold_contact(sim: Simulation, elapsed: float) -> float:
    """Hurt the player for standing entirely inside mold.

    Args:
        sim: The simulation to act on.
        elapsed: Scheduler units since the previous tick.

    Returns:
        Health removed.
    """
    cfg = sim.config
    if elapsed <= 0:
        return 0.0
    footprint = sim.player.footprint_tiles(cfg.tile_size)
    if not all(sim.grid.get(tx, ty) is Tile.MOLD for tx, ty in footprint):
        return 0.0
    damage = cfg.mold_damage_rate * elapsed / cfg.time_unit
    sim.player.health.increment(-damage)
    return damage
