# window.py
from __future__ import annotations

from typing import Optional, Tuple
import logging

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import BG, CELL_SIZE, TEXT, WINDOW_FPS, Config
from .controller import GameController
from .display import KEY_NAMES, TILE_COLORS, changed_cells
from .game import Direction, Tile

logger = logging.getLogger(__name__)

STATUS_HEIGHT = 28


def key_direction(key: int) -> Optional[Direction]:
    return KEY_NAMES.get(pygame.key.name(key))


class WindowDisplay:
    """
    Paints tile grids into a pygame window.

    Only cells that changed since the previous grid are redrawn; the status
    bar sits above the board.
    """

    def __init__(self, rows: int, columns: int, cell_size: int = CELL_SIZE, caption: str = "Snake"):
        pygame.init()
        self.cell_size = cell_size
        self.font = pygame.font.SysFont(None, 24)
        self.screen: pygame.Surface = pygame.display.set_mode(self.size_for(rows, columns))
        pygame.display.set_caption(caption)
        self.previous: Optional[np.ndarray] = None

    def size_for(self, rows: int, columns: int) -> Tuple[int, int]:
        return (columns * self.cell_size, rows * self.cell_size + STATUS_HEIGHT)

    def invalidate(self) -> None:
        self.previous = None
        self.screen.fill(BG)

    def draw_cell(self, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
        rect = pygame.Rect(gx * self.cell_size, gy * self.cell_size + STATUS_HEIGHT,
                           self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, color, rect)

    def draw(self, grid: np.ndarray, status: str = "") -> None:
        for x, y in changed_cells(grid, self.previous):
            self.draw_cell(x, y, TILE_COLORS[Tile(int(grid[y, x]))])
        self.previous = grid

        pygame.draw.rect(self.screen, BG, pygame.Rect(0, 0, self.screen.get_width(), STATUS_HEIGHT))
        if status:
            txt = self.font.render(status, True, TEXT)
            self.screen.blit(txt, (8, 6))
        pygame.display.flip()

    def draw_game_over(self, length: int) -> None:
        width, height = self.screen.get_size()
        # Dim with translucent overlay
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))  # RGBA
        self.screen.blit(overlay, (0, 0))

        title = self.font.render("GAME OVER", True, (240, 240, 250))
        sub   = self.font.render("Press R to restart", True, (220, 220, 230))
        size  = self.font.render(f"Length: {length}", True, (220, 220, 230))

        self.screen.blit(title, title.get_rect(center=(width // 2, height // 2 - 16)))
        self.screen.blit(sub, sub.get_rect(center=(width // 2, height // 2 + 16)))
        self.screen.blit(size, size.get_rect(center=(width // 2, height // 2 + 44)))
        pygame.display.flip()
        self.previous = None

    def close(self) -> None:
        pygame.quit()


def handle_input(controller: GameController) -> Tuple[bool, bool]:
    """Process events. Returns (running, restart_requested)."""
    restart = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False, restart
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_q, pygame.K_ESCAPE):
                return False, restart
            if event.key == pygame.K_r:
                restart = True
                continue
            direction = key_direction(event.key)
            if direction is not None:
                controller.set_direction(direction)
    return True, restart


def run(cfg: Config) -> None:
    """Fixed-interval driver for the window frontend."""
    controller = GameController(cfg)
    display = WindowDisplay(cfg.rows, cfg.columns)
    clock = pygame.time.Clock()
    display.invalidate()

    last_move = pygame.time.get_ticks()
    shown_game_over = False

    try:
        while True:
            # 1) input
            running, restart = handle_input(controller)
            if not running:
                break
            if restart:
                controller.restart()
                display.invalidate()
                shown_game_over = False

            # 2) update, gated on the tick interval
            now = pygame.time.get_ticks()
            if not controller.game_over and now - last_move >= cfg.tick_ms:
                controller.tick()
                last_move = now

            # 3) render
            if controller.game_over:
                if not shown_game_over:
                    display.draw(controller.tiles(), f"Length: {controller.length}")
                    display.draw_game_over(controller.length)
                    shown_game_over = True
            else:
                display.draw(controller.tiles(), f"Length: {controller.length}")

            clock.tick(WINDOW_FPS)  # high FPS; movement gated on tick_ms
    finally:
        display.close()
