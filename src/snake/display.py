# display.py
"""Pieces shared by the terminal and window frontends."""
from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np  # type: ignore

from .config import BG, GREEN, LIME, RED
from .game import Direction, Tile

# Window colors per tile.
TILE_COLORS = {
    Tile.GROUND: BG,
    Tile.SNAKE_HEAD: LIME,
    Tile.SNAKE_TAIL: GREEN,
    Tile.APPLE: RED,
}

# Key names -> directions; arrows and WASD in both frontends.
KEY_NAMES = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


def changed_cells(
    grid: np.ndarray, previous: Optional[np.ndarray]
) -> List[Tuple[int, int]]:
    """
    (x, y) cells that need repainting.

    Every cell is returned when there is no previous grid or its shape
    differs (new game on a resized board).
    """
    if previous is None or previous.shape != grid.shape:
        rows, columns = grid.shape
        return [(x, y) for y in range(rows) for x in range(columns)]
    ys, xs = np.nonzero(grid != previous)
    return [(int(x), int(y)) for y, x in zip(ys, xs)]
