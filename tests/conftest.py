"""Shared fixtures for the Tillage test suite."""

from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest
from numpy.random import Generator

from tillage.simulation.config import SimulationConfig
from tillage.simulation.engine import Simulation
from tillage.world.grid import TileGrid
from tillage.world.tiles import Tile

TILE = 16


def centre(tx: int, ty: int) -> tuple[float, float]:
    """World-pixel centre of tile ``(tx, ty)``."""
    return ((tx + 0.5) * TILE, (ty + 0.5) * TILE)


def farm_grid(width: int, height: int) -> TileGrid:
    """A grid filled with bare farm."""
    grid = TileGrid(width=width, height=height)
    grid.fill(Tile.FARM)
    return grid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> TileGrid:
    """An 8x8 farm grid for fast tests."""
    return farm_grid(8, 8)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default real-time config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def turn_config() -> SimulationConfig:
    """Turn-based config with short, fixed timings."""
    return SimulationConfig(
        mode="turn",
        growth_time_min=3,
        growth_time_max=3,
        mold_grow_time=2,
        anger_warning_delay=2,
        anger_real_delay=2,
        anger_pass_delay=2,
        time_unit=1.0,
    )


@pytest.fixture
def realtime_sim(default_config: SimulationConfig) -> Simulation:
    """A real-time simulation on an 8x8 farm with the player on (3, 3).

    Harvest radius is zero so tests control every tile change.
    """
    cfg = replace(default_config, harvest_radius=0, player_start=centre(3, 3))
    return Simulation(config=cfg, grid=farm_grid(8, 8))


@pytest.fixture
def turn_sim(turn_config: SimulationConfig) -> Simulation:
    """A turn-based simulation on an 8x8 farm with the player on (3, 3)."""
    cfg = replace(turn_config, harvest_radius=0, player_start=centre(3, 3))
    return Simulation(config=cfg, grid=farm_grid(8, 8))
