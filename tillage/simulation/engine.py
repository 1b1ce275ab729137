"""Simulation — the per-tick loop the host calls into.

Owns the tile grid, the event scheduler, the mold front, the player and
a seeded RNG, and advances them in a fixed order every tick:

1. Sync the scheduler clock to the host's time (or turn)
2. Mold contact damage for the time since the previous tick
3. Harvest pass around the player
4. Arm explosions for angry carrots near the player (damage lands here)
5. Drain due events and run each through the propagation engine
6. Sweep the mold front (real-time mode)
7. Lose check: depleted health ends the game

Harvest runs before the drain, so an effect that fires this tick is only
seen by the harvest pass on the next one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from tillage.events.mold import MoldFront
from tillage.events.scheduler import Scheduler, make_scheduler
from tillage.events.types import EventKind
from tillage.player.player import Direction, Player
from tillage.player.stats import NumStat
from tillage.rules.harvest import arm_explosions, harvest, mold_contact
from tillage.rules.propagation import apply_event, spread_mold
from tillage.simulation.config import SimulationConfig
from tillage.world.grid import TileChange, TileGrid

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """What changed during one tick, for the presentation layer.

    Attributes:
        tile_changes: Cells whose tile changed, with their new tile.
        stat_changes: Change in each player stat over the tick.
        terminal: True once the player has lost.
    """

    tile_changes: list[TileChange] = field(default_factory=list)
    stat_changes: dict[str, float] = field(default_factory=dict)
    terminal: bool = False


@dataclass
class Simulation:
    """Drives the tile simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        grid: The tile map.
        scheduler: Pending delayed events.
        mold_front: Pending mold-spread checks (real-time mode only).
        player: The player.
        rng: Seeded random generator shared by all rules.
        now: Time (or turn) of the most recent tick.
        ticks: Number of ticks advanced so far.
        terminal: True once the player has lost.
    """

    config: SimulationConfig
    grid: TileGrid
    scheduler: Scheduler = field(init=False)
    mold_front: MoldFront = field(init=False, default_factory=MoldFront)
    player: Player = field(init=False)
    rng: Generator = field(init=False)
    now: float = 0
    ticks: int = 0
    terminal: bool = False

    def __post_init__(self) -> None:
        """Build scheduler, player and RNG from config."""
        cfg = self.config
        self.rng = np.random.default_rng(cfg.seed)
        self.scheduler = make_scheduler(cfg.mode)
        start_x, start_y = cfg.player_start
        self.player = Player(
            x=start_x,
            y=start_y,
            health=NumStat(cfg.health_max, cfg.health_max),
            food=NumStat(0.0, cfg.food_max),
        )

    @classmethod
    def with_field(cls, config: SimulationConfig) -> Simulation:
        """Build a simulation on a generated demo field.

        Args:
            config: Configuration; ``map_width``/``map_height`` size the
                field and ``seed`` places its rocks.
        """
        grid = TileGrid(width=config.map_width, height=config.map_height)
        grid.layout_field(np.random.default_rng(config.seed))
        return cls(config=config, grid=grid)

    # --- Host-facing operations ---

    def move_player(self, x: float, y: float) -> None:
        """Record a new player position.  Nothing else happens until a tick."""
        self.player.move_to(x, y)

    def step_player(self, direction: Direction) -> TickResult | None:
        """Take one turn: hop one tile, then advance the turn counter.

        Returns:
            The turn's result, or None if the move was blocked (a
            blocked move does not use up a turn).
        """
        if not self.player.step(direction, self.grid, self.config.tile_size):
            return None
        return self.advance(self.now + 1)

    def advance(self, now: float) -> TickResult:
        """Advance the simulation to time (or turn) ``now``.

        Args:
            now: Host clock in milliseconds (real-time mode) or the
                current turn number (turn mode).

        Returns:
            Tile diff, stat deltas and the terminal flag for this tick.
        """
        if self.terminal:
            return TickResult(terminal=True)

        health_before = self.player.health.level
        food_before = self.player.food.level
        # Turns count from turn 0; a host clock has no start until the first tick.
        started = self.ticks > 0 or self.config.turn_based
        elapsed = max(0.0, now - self.now) if started else 0.0

        # 1. Clock
        self.scheduler.set_clock(now)
        self.now = self.scheduler.now

        # 2. Damage from standing in mold
        mold_contact(self, elapsed)

        # 3. Harvest
        harvest(self)

        # 4. Arm explosions
        arm_explosions(self)

        # 5. Drain and propagate
        for event in self.scheduler.advance(self.now):
            apply_event(self, event)

        # 6. Mold front
        if not self.config.turn_based:
            for x, y in self.mold_front.sweep(self.now):
                spread_mold(self, x, y)

        # 7. Lose check
        if self.player.health.is_depleted:
            self.terminal = True
            logger.info(
                "player health depleted at tick %d (food %.0f)",
                self.ticks,
                self.player.food.level,
            )

        self.ticks += 1
        return TickResult(
            tile_changes=self.grid.drain_changes(),
            stat_changes={
                "health": self.player.health.level - health_before,
                "food": self.player.food.level - food_before,
            },
            terminal=self.terminal,
        )

    def run(self, ticks: int, dt: float = 1) -> TickResult:
        """Advance ``ticks`` times, ``dt`` apart, stopping early on a loss.

        Returns:
            The result of the last tick advanced.
        """
        result = TickResult(terminal=self.terminal)
        for _ in range(ticks):
            result = self.advance(self.now + dt)
            if result.terminal:
                break
        return result

    # --- Hooks used by the rules ---

    def schedule_spread(self, x: int, y: int) -> None:
        """Queue the next mold-spread check for ``(x, y)``."""
        delay = self.config.mold_grow_time
        if self.config.turn_based:
            self.scheduler.schedule(EventKind.SPREAD, x, y, delay)
        else:
            self.mold_front.add(x, y, self.scheduler.now + delay)

    def cancel_pending(self, x: int, y: int) -> None:
        """Cancel every pending event and mold check on ``(x, y)``."""
        self.scheduler.cancel(x, y)
        self.mold_front.discard(x, y)


def initialize(
    map_width: int,
    map_height: int,
    initial_tiles: Sequence[Sequence[int]] | Mapping[tuple[int, int], int],
    config: SimulationConfig | None = None,
) -> Simulation:
    """Build a simulation over a supplied map.

    Args:
        map_width: Columns in the map.
        map_height: Rows in the map.
        initial_tiles: Either rows of tile codes (``rows[y][x]``) or a
            mapping from ``(x, y)`` to tile code.  Cells not given, and
            anything beyond the given size, read as VOID.
        config: Simulation configuration; defaults are used if omitted.
    """
    config = config or SimulationConfig()
    if isinstance(initial_tiles, Mapping):
        grid = TileGrid.from_mapping(map_width, map_height, initial_tiles)
    else:
        grid = TileGrid.from_rows(initial_tiles, width=map_width, height=map_height)
    return Simulation(config=config, grid=grid)


def on_player_moved(sim: Simulation, new_x: float, new_y: float) -> None:
    """Update the player's position without running any rules."""
    sim.move_player(new_x, new_y)


def advance_tick(sim: Simulation, now: float) -> TickResult:
    """Run one tick of the simulation at time (or turn) ``now``."""
    return sim.advance(now)
