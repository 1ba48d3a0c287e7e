"""
Tests for snake.display - shared frontend helpers.
"""

import numpy as np

from snake.display import KEY_NAMES, TILE_COLORS, changed_cells
from snake.game import Direction, Tile


class TestChangedCells:
    """Diffing a tile grid against the previous frame."""

    def test_first_frame_repaints_everything(self):
        grid = np.zeros((2, 3), dtype=np.int8)
        assert sorted(changed_cells(grid, None)) == sorted(
            [(x, y) for y in range(2) for x in range(3)]
        )

    def test_identical_frames(self):
        grid = np.zeros((4, 4), dtype=np.int8)
        assert changed_cells(grid, grid.copy()) == []

    def test_only_changed_cells(self):
        previous = np.zeros((3, 5), dtype=np.int8)
        grid = previous.copy()
        grid[2, 4] = Tile.APPLE
        grid[0, 1] = Tile.SNAKE_HEAD
        assert sorted(changed_cells(grid, previous)) == [(1, 0), (4, 2)]

    def test_shape_change_repaints_everything(self):
        previous = np.zeros((3, 3), dtype=np.int8)
        grid = np.zeros((2, 4), dtype=np.int8)
        assert len(changed_cells(grid, previous)) == 8


class TestTables:
    """Every tile has a color and WASD mirrors the arrows."""

    def test_every_tile_has_a_color(self):
        assert set(TILE_COLORS) == set(Tile)

    def test_key_names(self):
        assert KEY_NAMES["up"] is KEY_NAMES["w"] is Direction.UP
        assert KEY_NAMES["down"] is KEY_NAMES["s"] is Direction.DOWN
        assert KEY_NAMES["left"] is KEY_NAMES["a"] is Direction.LEFT
        assert KEY_NAMES["right"] is KEY_NAMES["d"] is Direction.RIGHT
