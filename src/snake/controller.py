# controller.py
from __future__ import annotations

from typing import Optional
import logging
import random

import numpy as np  # type: ignore

from .config import Config
from .game import (
    Direction, Game, advance, create_board, create_game, is_opposite, project,
    require_direction,
)

logger = logging.getLogger(__name__)


class GameController:
    """
    Single owner of the current Game.

    The timer calls tick(); input handlers call set_direction(). A direction
    request is checked against the direction the head actually travelled on
    the last tick, so two quick presses inside one tick (e.g. UP then LEFT
    while heading RIGHT) can never fold the head back onto its neck.
    """

    def __init__(self, cfg: Optional[Config] = None, rng: Optional[random.Random] = None):
        self.cfg = cfg or Config()
        self.rng = rng or random.Random(self.cfg.seed)
        self.board = create_board(self.cfg.rows, self.cfg.columns)
        self.game: Game = create_game(self.board, self.rng)
        self.pending: Optional[Direction] = None
        self.games_played = 1

    # ---------- Input ----------
    def set_direction(self, direction: Direction) -> bool:
        """Queue a turn for the next tick. Returns False if it was rejected."""
        direction = require_direction(direction)
        if self.game.game_over:
            return False
        if is_opposite(direction, self.game.head.direction):
            return False
        self.pending = direction
        return True

    # ---------- Update ----------
    def tick(self) -> Game:
        before = self.game
        self.game = advance(before, self.pending, self.rng)
        self.pending = None

        if self.game is before:
            return self.game
        if len(self.game.player) > len(before.player):
            logger.debug("apple eaten, length %d, next apple at %s",
                         len(self.game.player), self.game.apple)
        if self.game.game_over:
            logger.info("game %d over at length %d", self.games_played, self.length)
        return self.game

    def restart(self) -> Game:
        self.game = create_game(self.board, self.rng)
        self.pending = None
        self.games_played += 1
        return self.game

    def resize(self, rows: int, columns: int) -> Game:
        """Boards are never resized in place; a new size means a new game."""
        self.board = create_board(rows, columns)
        logger.info("board resized to %dx%d", rows, columns)
        return self.restart()

    # ---------- Output ----------
    def tiles(self) -> np.ndarray:
        return project(self.game)

    @property
    def length(self) -> int:
        return len(self.game.player)

    @property
    def game_over(self) -> bool:
        return self.game.game_over
