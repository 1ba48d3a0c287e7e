# game.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Iterable, List, Optional, Tuple
import logging
import random

import numpy as np  # type: ignore

from .config import (
    DEFAULT_ROWS, DEFAULT_COLUMNS, MIN_CELLS, APPLE_SAMPLE_ATTEMPTS,
    ConfigurationError, BoardFullError,
)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ---------- Directions ----------
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def reverse(self) -> "Direction":
        return Direction((-self.dx, -self.dy))


DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.dx == -b.dx and a.dy == -b.dy


def require_direction(direction) -> Direction:
    if not isinstance(direction, Direction):
        raise ConfigurationError(f"not a direction: {direction!r}")
    return direction


# ---------- Tiles ----------
class Tile(IntEnum):
    GROUND = 0
    SNAKE_HEAD = 1
    SNAKE_TAIL = 2
    APPLE = 3


# ---------- State ----------
@dataclass(frozen=True)
class Board:
    rows: int
    columns: int

    @property
    def cells(self) -> int:
        return self.rows * self.columns

    def contains(self, position: Position) -> bool:
        x, y = position
        return not (x < 0 or x >= self.columns or y < 0 or y >= self.rows)


@dataclass(frozen=True)
class Segment:
    position: Position
    direction: Direction


# Head at index 0; index i + 1 trails index i.
Player = Tuple[Segment, ...]


@dataclass(frozen=True)
class Game:
    board: Board
    player: Player
    apple: Position
    game_over: bool = False

    @property
    def head(self) -> Segment:
        return self.player[0]


# ---------- Constructors ----------
def create_board(rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLUMNS) -> Board:
    for name, value in (("rows", rows), ("columns", columns)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise ConfigurationError(f"{name} must be positive, got {value}")
    if rows * columns < MIN_CELLS:
        raise ConfigurationError(
            f"board {rows}x{columns} needs at least {MIN_CELLS} cells"
        )
    return Board(rows=rows, columns=columns)


def random_position(board: Board, rng: Optional[random.Random] = None) -> Position:
    rng = rng or random
    return (rng.randrange(board.columns), rng.randrange(board.rows))


def create_player(board: Board, rng: Optional[random.Random] = None) -> Player:
    rng = rng or random
    position = random_position(board, rng)
    return (Segment(position, rng.choice(DIRECTIONS)),)


def player_positions(player: Iterable[Segment]) -> List[Position]:
    return [segment.position for segment in player]


def is_occupied(player: Iterable[Segment], position: Position) -> bool:
    return any(segment.position == position for segment in player)


def create_apple(
    board: Board, player: Player, rng: Optional[random.Random] = None
) -> Position:
    """
    Uniformly random cell not covered by the player.

    Rejection sampling first; after APPLE_SAMPLE_ATTEMPTS misses the free
    cells are enumerated and one is drawn directly, so a crowded board never
    loops for long. Raises BoardFullError when no cell is free.
    """
    rng = rng or random
    occupied = set(player_positions(player))
    if len(occupied) >= board.cells:
        raise BoardFullError(
            f"no free cell for an apple: {len(occupied)} of {board.cells} occupied"
        )

    for _ in range(APPLE_SAMPLE_ATTEMPTS):
        position = random_position(board, rng)
        if position not in occupied:
            return position

    free = [
        (x, y)
        for y in range(board.rows)
        for x in range(board.columns)
        if (x, y) not in occupied
    ]
    return rng.choice(free)


def create_game(
    board: Optional[Board] = None, rng: Optional[random.Random] = None
) -> Game:
    board = board or create_board()
    player = create_player(board, rng)
    apple = create_apple(board, player, rng)
    return Game(board=board, player=player, apple=apple, game_over=False)


# ---------- Transition ----------
def next_position(segment: Segment) -> Position:
    x, y = segment.position
    return (x + segment.direction.dx, y + segment.direction.dy)


def steer(player: Player, direction: Direction) -> Player:
    """Point the head at `direction` unless that would reverse it."""
    direction = require_direction(direction)
    head = player[0]
    if is_opposite(direction, head.direction) or direction is head.direction:
        return player
    return (replace(head, direction=direction),) + player[1:]


def move_player(player: Player) -> Player:
    # Lag-one: every trailing segment takes its predecessor's pre-move state.
    head = player[0]
    moved_head = Segment(next_position(head), head.direction)
    return (moved_head,) + player[:-1]


def grow_player(player: Player) -> Player:
    head = player[0]
    return (Segment(next_position(head), head.direction),) + player


def has_failed(board: Board, player: Player) -> bool:
    head = player[0].position
    if not board.contains(head):
        return True
    return is_occupied(player[1:], head)


def advance(
    game: Game,
    desired: Optional[Direction] = None,
    rng: Optional[random.Random] = None,
) -> Game:
    """
    Advance the game by one tick.

    - A game-over snapshot is returned unchanged.
    - `desired` turns the head first; the exact reverse is ignored.
    - If the head sat on the apple before moving, the chain grows by one
      and a new apple is placed against the grown chain.
    - On a wall or self hit the pre-move snapshot comes back with
      game_over set, so the fatal move is never drawn.
    """
    if game.game_over:
        return game

    player = game.player
    if desired is not None:
        player = steer(player, desired)

    eating = player[0].position == game.apple
    moved = grow_player(player) if eating else move_player(player)

    if has_failed(game.board, moved):
        logger.debug("game over at %s heading %s",
                     player[0].position, player[0].direction.name)
        return replace(game, game_over=True)

    if not eating:
        return replace(game, player=moved)

    if len(moved) >= game.board.cells:
        logger.info("board filled at length %d", len(moved))
        return replace(game, player=moved, game_over=True)

    apple = create_apple(game.board, moved, rng)
    return replace(game, player=moved, apple=apple)


# ---------- Tiles ----------
def project(game: Game) -> np.ndarray:
    """Tile grid of shape (rows, columns); grid[y, x] is the tile at (x, y)."""
    board = game.board
    grid = np.full((board.rows, board.columns), Tile.GROUND, dtype=np.int8)

    ax, ay = game.apple
    grid[ay, ax] = Tile.APPLE

    for segment in game.player[1:]:
        x, y = segment.position
        grid[y, x] = Tile.SNAKE_TAIL

    hx, hy = game.head.position
    grid[hy, hx] = Tile.SNAKE_HEAD
    return grid
