"""Tests for tillage.world.grid and tillage.world.tiles."""

import numpy as np
import pytest
from numpy.random import Generator

from tillage.world.grid import TileChange, TileGrid
from tillage.world.tiles import INDESTRUCTIBLE, REPLANTABLE, SOLID, Tile


class TestTiles:
    """Tests for tile codes and tile-class sets."""

    def test_codes_match_tileset(self) -> None:
        assert Tile.VOID == -1
        assert Tile.FARM == 2
        assert Tile.CARROT == 5
        assert Tile.MOLD == 14

    def test_void_is_solid(self) -> None:
        assert Tile.VOID in SOLID
        assert Tile.ROCK in SOLID
        assert Tile.FARM not in SOLID

    def test_class_sets(self) -> None:
        assert REPLANTABLE == {Tile.CARROT, Tile.FARM, Tile.MOLD}
        assert INDESTRUCTIBLE == {Tile.VOID, Tile.ROCK}


class TestTileGrid:
    """Tests for the TileGrid accessors."""

    def test_unset_cells_read_void(self) -> None:
        grid = TileGrid(width=4, height=3)
        assert grid.get(2, 1) is Tile.VOID
        assert grid.count(Tile.VOID) == 12

    @pytest.mark.parametrize(
        ("x", "y"),
        [(-1, 0), (0, -1), (8, 0), (0, 8), (100, -100), (-5, 7)],
    )
    def test_out_of_bounds_reads_void(self, small_grid: TileGrid, x: int, y: int) -> None:
        assert small_grid.get(x, y) is Tile.VOID

    def test_set_and_get(self, small_grid: TileGrid) -> None:
        small_grid.set(3, 5, Tile.CARROT)
        assert small_grid.get(3, 5) is Tile.CARROT
        assert small_grid.tiles[5, 3] == Tile.CARROT

    def test_set_out_of_bounds_is_ignored(self, small_grid: TileGrid) -> None:
        before = small_grid.tiles.copy()
        small_grid.set(-1, 4, Tile.ROCK)
        small_grid.set(8, 8, Tile.ROCK)
        assert np.array_equal(before, small_grid.tiles)
        assert small_grid.drain_changes() == []

    def test_change_log_keeps_last_write(self, small_grid: TileGrid) -> None:
        small_grid.set(1, 1, Tile.PLANT)
        small_grid.set(2, 2, Tile.ROCK)
        small_grid.set(1, 1, Tile.CARROT)
        assert small_grid.drain_changes() == [
            TileChange(1, 1, Tile.CARROT),
            TileChange(2, 2, Tile.ROCK),
        ]
        assert small_grid.drain_changes() == []

    def test_rewriting_same_tile_is_not_a_change(self, small_grid: TileGrid) -> None:
        small_grid.set(0, 0, Tile.FARM)
        assert small_grid.drain_changes() == []

    def test_neighbours4_include_off_map(self, small_grid: TileGrid) -> None:
        neighbours = small_grid.neighbours4(0, 0)
        assert len(neighbours) == 4
        assert (-1, 0) in neighbours
        assert small_grid.get(-1, 0) is Tile.VOID

    def test_is_solid(self, small_grid: TileGrid) -> None:
        small_grid.set(2, 2, Tile.ROCK)
        assert small_grid.is_solid(2, 2)
        assert small_grid.is_solid(-1, 2)
        assert not small_grid.is_solid(3, 3)

    def test_from_rows(self) -> None:
        grid = TileGrid.from_rows([[2, 3], [5]])
        assert (grid.width, grid.height) == (2, 2)
        assert grid.get(1, 0) is Tile.PLANT
        assert grid.get(0, 1) is Tile.CARROT
        assert grid.get(1, 1) is Tile.VOID

    def test_from_rows_bounded(self) -> None:
        grid = TileGrid.from_rows([[2, 3, 6], [5, 5]], width=2, height=3)
        assert (grid.width, grid.height) == (2, 3)
        assert grid.count(Tile.ROCK) == 0
        assert grid.get(1, 1) is Tile.CARROT
        assert grid.get(0, 2) is Tile.VOID

    def test_from_mapping_drops_out_of_bounds(self) -> None:
        grid = TileGrid.from_mapping(2, 2, {(0, 0): Tile.FARM, (5, 5): Tile.ROCK})
        assert grid.get(0, 0) is Tile.FARM
        assert grid.count(Tile.ROCK) == 0

    def test_layout_field(self, rng: Generator) -> None:
        grid = TileGrid(width=10, height=8)
        grid.layout_field(rng, rock_count=3)
        assert all(grid.get(x, 0) is Tile.ROCK for x in range(10))
        assert all(grid.get(0, y) is Tile.ROCK for y in range(8))
        assert grid.count(Tile.FARM) >= (10 - 2) * (8 - 2) - 3
        assert grid.count(Tile.VOID) == 0
