# terminal.py
from __future__ import annotations

from typing import Optional, Tuple
import curses
import logging
import time

import numpy as np  # type: ignore

from .config import CELL_CHARS, HEADER_ROWS, MIN_CELLS, Config, ConfigurationError
from .controller import GameController
from .display import KEY_NAMES, changed_cells
from .game import Direction, Tile

logger = logging.getLogger(__name__)

CURSES_KEYS = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
}

# (foreground, background) per tile; the glyph is two spaces.
TILE_PAIRS = {
    Tile.GROUND: (curses.COLOR_BLACK, curses.COLOR_GREEN),
    Tile.SNAKE_HEAD: (curses.COLOR_BLACK, curses.COLOR_YELLOW),
    Tile.SNAKE_TAIL: (curses.COLOR_BLACK, curses.COLOR_BLUE),
    Tile.APPLE: (curses.COLOR_BLACK, curses.COLOR_RED),
}

# Fallback glyphs for terminals without color.
TILE_GLYPHS = {
    Tile.GROUND: "  ",
    Tile.SNAKE_HEAD: "@@",
    Tile.SNAKE_TAIL: "[]",
    Tile.APPLE: "()",
}


def board_size_for(screen_rows: int, screen_cols: int) -> Tuple[int, int]:
    """Largest (rows, columns) board that fits below the header."""
    rows = screen_rows - HEADER_ROWS
    # curses cannot write the bottom-right character without scrolling
    columns = (screen_cols - 1) // CELL_CHARS
    if rows < 1 or columns < 1 or rows * columns < MIN_CELLS:
        raise ConfigurationError(
            f"terminal {screen_cols}x{screen_rows} is too small for a board"
        )
    return rows, columns


def fitted_size(
    screen_rows: int, screen_cols: int, requested: Tuple[int, int], fit_terminal: bool
) -> Tuple[int, int]:
    """Board size for the current terminal: all of it, or `requested` clamped to it."""
    rows, columns = board_size_for(screen_rows, screen_cols)
    if fit_terminal:
        return rows, columns
    rows, columns = min(requested[0], rows), min(requested[1], columns)
    if rows * columns < MIN_CELLS:
        raise ConfigurationError(
            f"terminal {screen_cols}x{screen_rows} cannot show a {requested[1]}x{requested[0]} board"
        )
    return rows, columns


def key_direction(key: int) -> Optional[Direction]:
    if key in CURSES_KEYS:
        return CURSES_KEYS[key]
    if 0 <= key < 256:
        return KEY_NAMES.get(chr(key).lower())
    return None


class TerminalDisplay:
    """Paints tile grids with curses, repainting only changed cells."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.previous: Optional[np.ndarray] = None
        self.attrs = {tile: curses.A_NORMAL for tile in Tile}
        self.glyphs = dict(TILE_GLYPHS)

        if curses.has_colors():
            curses.start_color()
            for pair, tile in enumerate(Tile, start=1):
                fg, bg = TILE_PAIRS[tile]
                curses.init_pair(pair, fg, bg)
                self.attrs[tile] = curses.color_pair(pair)
                self.glyphs[tile] = " " * CELL_CHARS

    def invalidate(self) -> None:
        self.previous = None
        self.stdscr.erase()

    def draw(self, grid: np.ndarray, status: str) -> None:
        for x, y in changed_cells(grid, self.previous):
            tile = Tile(int(grid[y, x]))
            self.stdscr.addstr(y + HEADER_ROWS, x * CELL_CHARS, self.glyphs[tile], self.attrs[tile])
        self.previous = grid

        self.stdscr.move(0, 0)
        self.stdscr.clrtoeol()
        self.stdscr.addnstr(0, 0, status, max(self.stdscr.getmaxyx()[1] - 1, 0))
        self.stdscr.refresh()

    def draw_game_over(self, length: int) -> None:
        rows, cols = self.stdscr.getmaxyx()
        for offset, line in enumerate(("GAME OVER", f"Length: {length}", "r: restart  q: quit")):
            y = rows // 2 - 1 + offset
            x = max((cols - len(line)) // 2, 0)
            self.stdscr.addnstr(y, x, line, max(cols - x - 1, 0), curses.A_REVERSE)
        self.stdscr.refresh()
        # the overlay covers board cells, so the next frame repaints everything
        self.previous = None

    def draw_message(self, message: str) -> None:
        """Blank screen with one line; used while no board fits."""
        self.invalidate()
        cols = self.stdscr.getmaxyx()[1]
        self.stdscr.addnstr(0, 0, message, max(cols - 1, 0))
        self.stdscr.refresh()


def _status(controller: GameController) -> str:
    board = controller.board
    return (f"Snake  length {controller.length}  "
            f"board {board.columns}x{board.rows}  "
            f"arrows/WASD move  r restart  q quit")


def run(stdscr, cfg: Config, fit_terminal: bool = True) -> None:
    """
    Fixed-interval driver for the curses frontend.

    With fit_terminal the board fills the terminal; otherwise the configured
    size is kept, clamped to what the terminal can show.
    """
    curses.curs_set(0)
    stdscr.nodelay(True)
    stdscr.keypad(True)

    requested = (cfg.rows, cfg.columns)
    cfg.rows, cfg.columns = fitted_size(*stdscr.getmaxyx(), requested, fit_terminal)
    controller = GameController(cfg)
    display = TerminalDisplay(stdscr)
    display.invalidate()
    display.draw(controller.tiles(), _status(controller))

    tick_s = cfg.tick_ms / 1000.0
    next_tick = time.monotonic() + tick_s
    over_since: Optional[float] = None
    too_small = False

    while True:
        # 1) input
        key = stdscr.getch()
        while key != -1:
            if key in (ord("q"), ord("Q")):
                return
            if key in (ord("r"), ord("R")) and not too_small:
                controller.restart()
                display.invalidate()
                over_since = None
            elif key == curses.KEY_RESIZE:
                over_since = None
                try:
                    controller.resize(*fitted_size(*stdscr.getmaxyx(), requested, fit_terminal))
                except ConfigurationError as exc:
                    # paused until a later resize fits
                    logger.warning("resize ignored: %s", exc)
                    too_small = True
                    display.draw_message("Terminal too small, enlarge it (q quits)")
                else:
                    too_small = False
                    display.invalidate()
            elif too_small:
                pass
            else:
                direction = key_direction(key)
                if direction is not None:
                    controller.set_direction(direction)
            key = stdscr.getch()

        if too_small:
            time.sleep(0.01)
            continue

        # 2) update
        now = time.monotonic()
        if now >= next_tick:
            next_tick = now + tick_s
            if controller.game_over:
                if over_since is not None and (now - over_since) * 1000 >= cfg.restart_delay_ms:
                    controller.restart()
                    display.invalidate()
                    over_since = None
            else:
                controller.tick()

            # 3) render
            if controller.game_over and over_since is None:
                display.draw(controller.tiles(), _status(controller))
                display.draw_game_over(controller.length)
                over_since = now
            elif not controller.game_over:
                display.draw(controller.tiles(), _status(controller))

        time.sleep(min(max(next_tick - time.monotonic(), 0.0), 0.01))
