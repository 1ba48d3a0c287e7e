# src/snake/__init__.py
"""Grid Snake: a pure tick-by-tick game core plus terminal and window frontends."""

from snake.config import Config, ConfigurationError, BoardFullError
from snake.game import (
    Board, Direction, Game, Segment, Tile,
    advance, create_apple, create_board, create_game, create_player, project,
)
from snake.controller import GameController

__all__ = [
    "Config", "ConfigurationError", "BoardFullError",
    "Board", "Direction", "Game", "Segment", "Tile",
    "advance", "create_apple", "create_board", "create_game", "create_player", "project",
    "GameController",
]
