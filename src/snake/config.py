# src/snake/config.py
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when a board, direction or runtime setting is malformed."""


class BoardFullError(ConfigurationError):
    """Raised when there is no free cell left to place an apple on."""


# ----- Grid -----
DEFAULT_ROWS, DEFAULT_COLUMNS = 50, 50
MIN_CELLS = 2  # head + apple

# ----- Timing -----
TICK_MS = 100
RESTART_DELAY_MS = 1500

# ----- Apple placement -----
# Rejected random samples before falling back to enumerating free cells.
APPLE_SAMPLE_ATTEMPTS = 64

# ----- Window frontend -----
CELL_SIZE = 20
WINDOW_FPS = 60

# ----- Colors (RGB, window frontend) -----
BG     = (20, 20, 24)
GREEN  = (80, 200, 80)
LIME   = (140, 240, 120)
RED    = (200, 70, 70)
TEXT   = (220, 220, 230)

# ----- Terminal frontend -----
HEADER_ROWS = 2      # status line + spacer above the board
CELL_CHARS = 2       # a terminal cell is roughly twice as tall as wide


def _require_int(name: str, value, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


# ----- Tunables -----
@dataclass
class Config:
    seed: int | None = None
    rows: int = DEFAULT_ROWS
    columns: int = DEFAULT_COLUMNS
    tick_ms: int = TICK_MS
    restart_delay_ms: int = RESTART_DELAY_MS

    def __post_init__(self):
        if self.seed is not None:
            _require_int("seed", self.seed, 0)
        _require_int("rows", self.rows, 1)
        _require_int("columns", self.columns, 1)
        _require_int("tick_ms", self.tick_ms, 1)
        _require_int("restart_delay_ms", self.restart_delay_ms, 0)
        if self.rows * self.columns < MIN_CELLS:
            raise ConfigurationError(
                f"board {self.rows}x{self.columns} needs at least {MIN_CELLS} cells"
            )
