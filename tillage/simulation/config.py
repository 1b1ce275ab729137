"""Config — load simulation parameters from YAML files.

Every tunable constant (timings, chances, radii, stat limits) lives in a
frozen dataclass passed to the simulation when it is built, so several
simulations with different settings can run side by side.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

MODES = ("realtime", "turn")


@dataclass(frozen=True)
class SimulationConfig:
    """Top-level simulation configuration.

    Durations are in scheduler units: milliseconds in ``realtime`` mode,
    turns in ``turn`` mode.

    Attributes:
        seed: RNG seed for deterministic replay.
        mode: ``"realtime"`` (host passes a clock) or ``"turn"`` (host
            passes a turn counter).
        map_width: Columns in the generated demo map.
        map_height: Rows in the generated demo map.
        tile_size: Tile width and height in world pixels.
        player_start: Starting player position in world pixels.
        player_speed: Real-time walking speed in pixels per second.
        harvest_radius: Radius, in tiles, of the area the player
            harvests each tick.
        blast_radius: Radius, in tiles, of an explosion.
        growth_time_min: Shortest time for a plant to finish growing.
        growth_time_max: Longest time for a plant to finish growing.
        mold_start_chance: Probability a finished plant goes moldy.
        mold_grow_time: Delay between mold spreading steps.
        anger_chance: Probability a fresh carrot starts getting angry.
        anger_warning_delay: Carrot to warning delay.
        anger_real_delay: Warning to angry delay.
        anger_pass_delay: Angry to calm delay.
        explosion_damage: Health lost per explosion.
        mold_damage_rate: Health lost per ``time_unit`` spent in mold.
        time_unit: Scheduler units per damage-rate unit (1000 turns
            milliseconds into seconds).
        health_max: Player health cap and starting value.
        food_max: Player food cap.
    """

    seed: int = 42
    mode: str = "realtime"
    map_width: int = 20
    map_height: int = 15
    tile_size: int = 16
    player_start: tuple[float, float] = (64.0, 64.0)
    player_speed: float = 100.0

    harvest_radius: int = 2
    blast_radius: int = 2

    # Growth
    growth_time_min: float = 10_000.0
    growth_time_max: float = 20_000.0

    # Mold
    mold_start_chance: float = 0.1
    mold_grow_time: float = 3_000.0

    # Anger chain
    anger_chance: float = 0.1
    anger_warning_delay: float = 5_000.0
    anger_real_delay: float = 10_000.0
    anger_pass_delay: float = 5_000.0
    explosion_damage: float = 20.0

    # Damage over time
    mold_damage_rate: float = 5.0
    time_unit: float = 1_000.0

    # Player stats
    health_max: float = 100.0
    food_max: float = 1_000.0

    def __post_init__(self) -> None:
        """Reject settings the simulation cannot run with.

        Raises:
            ValueError: On an unknown mode, a non-positive tile size or
                time unit, an inverted growth range, or a probability
                outside ``[0, 1]``.
        """
        if self.mode not in MODES:
            msg = f"mode must be one of {MODES}, got {self.mode!r}"
            raise ValueError(msg)
        if self.tile_size <= 0:
            msg = f"tile_size must be positive, got {self.tile_size}"
            raise ValueError(msg)
        if self.time_unit <= 0:
            msg = f"time_unit must be positive, got {self.time_unit}"
            raise ValueError(msg)
        if self.growth_time_min > self.growth_time_max:
            msg = (
                f"growth_time_min ({self.growth_time_min}) exceeds "
                f"growth_time_max ({self.growth_time_max})"
            )
            raise ValueError(msg)
        for name in ("mold_start_chance", "anger_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} must be within [0, 1], got {value}"
                raise ValueError(msg)

    @property
    def turn_based(self) -> bool:
        """Return True when the host drives the simulation in turns."""
        return self.mode == "turn"

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Keys left out of the file keep their defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If the file names an option that does not exist
                or holds an invalid value.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"unknown config option(s) in {path}: {', '.join(unknown)}"
            raise ValueError(msg)

        if "player_start" in data:
            data["player_start"] = tuple(float(v) for v in data["player_start"])

        logger.debug("loaded %d option(s) from %s", len(data), path)
        return cls(**data)
