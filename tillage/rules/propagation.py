"""Propagation engine — what each delayed event does to the world.

Every rule starts by checking that the tile still holds what the event
was scheduled for.  Events fire unconditionally, and between scheduling
and firing the player may have harvested the tile, mold may have
swallowed it, or an explosion may have flattened it.  When the check
fails the event is logged and skipped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from tillage.events.types import EventKind, ScheduledEvent
from tillage.rules.chance import roll
from tillage.rules.harvest import tiles_in_circle
from tillage.world.tiles import INDESTRUCTIBLE, INFECTABLE, Tile

if TYPE_CHECKING:
    from tillage.simulation.engine import Simulation

logger = logging.getLogger(__name__)


def apply_event(sim: Simulation, event: ScheduledEvent) -> None:
    """Run the rule for ``event`` against the simulation's grid.

    Args:
        sim: The simulation owning grid, scheduler and player.
        event: A due event returned by the scheduler.
    """
    x, y = event.x, event.y
    match event.kind:
        case EventKind.GROW:
            grow(sim, x, y)
        case EventKind.SPREAD:
            spread_mold(sim, x, y)
        case EventKind.ANGER_WARNING:
            _escalate(sim, x, y, Tile.CARROT, Tile.ANGER_WARNING)
            if sim.grid.get(x, y) is Tile.ANGER_WARNING:
                sim.scheduler.schedule(
                    EventKind.ANGER_REAL,
                    x,
                    y,
                    sim.config.anger_real_delay,
                )
        case EventKind.ANGER_REAL:
            _escalate(sim, x, y, Tile.ANGER_WARNING, Tile.ANGER_REAL)
            if sim.grid.get(x, y) is Tile.ANGER_REAL:
                sim.scheduler.schedule(
                    EventKind.ANGER_PASS,
                    x,
                    y,
                    sim.config.anger_pass_delay,
                )
        case EventKind.ANGER_PASS:
            _escalate(sim, x, y, Tile.ANGER_REAL, Tile.CARROT)
        case EventKind.EXPLOSION:
            explode(sim, x, y)
        case _:
            assert_never(event.kind)


def grow(sim: Simulation, x: int, y: int) -> None:
    """Finish growing the plant at ``(x, y)``.

    The plant either goes moldy (and starts spreading) or ripens into a
    carrot that may later turn angry.
    """
    grid = sim.grid
    cfg = sim.config
    tile = grid.get(x, y)
    if tile is not Tile.PLANT:
        logger.warning("grow fired on %s at (%d, %d), not a plant", tile.name, x, y)
        return

    if roll(sim.rng, cfg.mold_start_chance):
        grid.set(x, y, Tile.MOLD)
        sim.schedule_spread(x, y)
        return

    grid.set(x, y, Tile.CARROT)
    if roll(sim.rng, cfg.anger_chance):
        sim.scheduler.schedule(EventKind.ANGER_WARNING, x, y, cfg.anger_warning_delay)


def spread_mold(sim: Simulation, x: int, y: int) -> list[tuple[int, int]]:
    """Spread mold from ``(x, y)`` into its growable 4-neighbours.

    Each newly infected tile gets its own spread check, so mold advances
    as a wavefront one ring per ``mold_grow_time``.

    Returns:
        The tiles that were infected.
    """
    grid = sim.grid
    if grid.get(x, y) is not Tile.MOLD:
        logger.debug("mold at (%d, %d) is gone; nothing to spread", x, y)
        return []

    infected: list[tuple[int, int]] = []
    for nx, ny in grid.neighbours4(x, y):
        if grid.get(nx, ny) in INFECTABLE:
            grid.set(nx, ny, Tile.MOLD)
            sim.schedule_spread(nx, ny)
            infected.append((nx, ny))
    return infected


def explode(sim: Simulation, x: int, y: int) -> list[tuple[int, int]]:
    """Blow up the angry carrot at ``(x, y)``.

    The player was hurt when the explosion was armed.  Every
    destructible tile within ``blast_radius`` of the carrot is burned back to bare farm,
    and whatever was pending on it is cancelled so no stale effect
    lands on the cleared ground.

    Returns:
        The tiles reset to farm.
    """
    grid = sim.grid
    cfg = sim.config
    if grid.get(x, y) is not Tile.ANGER_REAL:
        logger.debug("explosion at (%d, %d) fizzled: tile no longer angry", x, y)
        return []

    # The carrot itself always goes, even with a zero blast radius.
    grid.set(x, y, Tile.FARM)
    sim.cancel_pending(x, y)
    burned = [(x, y)]

    centre_x = (x + 0.5) * cfg.tile_size
    centre_y = (y + 0.5) * cfg.tile_size
    for tx, ty in tiles_in_circle(centre_x, centre_y, cfg.blast_radius, cfg.tile_size):
        if (tx, ty) == (x, y):
            continue
        if grid.get(tx, ty) in INDESTRUCTIBLE:
            continue
        grid.set(tx, ty, Tile.FARM)
        sim.cancel_pending(tx, ty)
        burned.append((tx, ty))

    logger.info(
        "explosion at (%d, %d): %d tile(s) burned, health now %.1f",
        x,
        y,
        len(burned),
        sim.player.health.level,
    )
    return burned


def _escalate(sim: Simulation, x: int, y: int, expected: Tile, result: Tile) -> None:
    """Move one step along the anger chain if the tile is where we left it."""
    tile = sim.grid.get(x, y)
    if tile is not expected:
        logger.warning(
            "anger step %s -> %s skipped at (%d, %d): tile is %s",
            expected.name,
            result.name,
            x,
            y,
            tile.name,
        )
        return
    sim.grid.set(x, y, result)
