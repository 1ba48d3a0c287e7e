"""
Tests for snake.terminal: the helpers, and the driver loop on a fake screen.
"""

import pytest

curses = pytest.importorskip("curses")

from snake.config import Config, ConfigurationError
from snake.game import Direction
from snake.terminal import board_size_for, fitted_size, key_direction, run


class TestBoardSize:
    """Terminal size to board size."""

    def test_standard_terminal(self):
        # two header rows; two characters per cell; last column left free
        assert board_size_for(24, 80) == (22, 39)

    def test_too_small(self):
        with pytest.raises(ConfigurationError):
            board_size_for(2, 80)
        with pytest.raises(ConfigurationError):
            board_size_for(3, 2)


class TestKeys:
    """Key codes to directions."""

    def test_arrows(self):
        assert key_direction(curses.KEY_UP) is Direction.UP
        assert key_direction(curses.KEY_DOWN) is Direction.DOWN
        assert key_direction(curses.KEY_LEFT) is Direction.LEFT
        assert key_direction(curses.KEY_RIGHT) is Direction.RIGHT

    def test_wasd_any_case(self):
        assert key_direction(ord("w")) is Direction.UP
        assert key_direction(ord("A")) is Direction.LEFT

    def test_unmapped(self):
        assert key_direction(ord("x")) is None
        assert key_direction(curses.KEY_HOME) is None


class TestFittedSize:
    """Board size after a resize."""

    def test_fit_terminal_fills_it(self):
        assert fitted_size(12, 30, (5, 5), True) == (10, 14)

    def test_requested_size_is_kept(self):
        assert fitted_size(24, 80, (5, 7), False) == (5, 7)

    def test_requested_size_is_clamped(self):
        assert fitted_size(5, 8, (5, 7), False) == (3, 3)

    def test_too_small(self):
        with pytest.raises(ConfigurationError):
            fitted_size(3, 4, (5, 5), True)


class FakeScreen:
    """
    Stand-in for a curses window.

    Keys come from a script; a KEY_RESIZE entry is paired with the new size.
    Writes outside the screen raise curses.error like the real thing.
    """

    def __init__(self, size, script):
        self.size = size
        self.script = list(script)
        self.texts = []

    def getch(self):
        if not self.script:
            return ord("q")
        key = self.script.pop(0)
        if isinstance(key, tuple):
            key, self.size = key
        return key

    def getmaxyx(self):
        return self.size

    def _check(self, y, x):
        rows, cols = self.size
        if not (0 <= y < rows and 0 <= x < cols):
            raise curses.error(f"write at {(y, x)} outside {self.size}")

    def addstr(self, y, x, text, attr=0):
        self._check(y, x + len(text) - 1)

    def addnstr(self, y, x, text, n, attr=0):
        self._check(y, x)
        self.texts.append(text)

    def nodelay(self, flag):
        pass

    def keypad(self, flag):
        pass

    def erase(self):
        pass

    def move(self, y, x):
        self._check(y, x)

    def clrtoeol(self):
        pass

    def refresh(self):
        pass


@pytest.fixture
def no_terminal(monkeypatch):
    monkeypatch.setattr(curses, "curs_set", lambda visibility: None)
    monkeypatch.setattr(curses, "has_colors", lambda: False)


class TestRunResize:
    """The driver loop survives resizes, including ones no board fits."""

    def test_shrinking_below_a_board_pauses_instead_of_exiting(self, no_terminal):
        screen = FakeScreen((24, 80), [(curses.KEY_RESIZE, (3, 4)), -1, -1])
        run(screen, Config(seed=1, tick_ms=1), True)
        assert any("too small" in text for text in screen.texts)

    def test_play_resumes_when_terminal_grows_again(self, no_terminal):
        screen = FakeScreen(
            (24, 80),
            [(curses.KEY_RESIZE, (3, 4)), -1, (curses.KEY_RESIZE, (12, 30)), -1, -1, -1],
        )
        run(screen, Config(seed=2, tick_ms=1), True)
        paused = next(i for i, text in enumerate(screen.texts) if "too small" in text)
        assert any("board 14x10" in text for text in screen.texts[paused + 1:])

    def test_explicit_size_survives_resize(self, no_terminal):
        screen = FakeScreen(
            (24, 80),
            [(curses.KEY_RESIZE, (12, 30)), -1, -1, -1, (curses.KEY_RESIZE, (5, 8)), -1, -1, -1],
        )
        run(screen, Config(seed=3, rows=5, columns=5, tick_ms=1), False)
        statuses = [text for text in screen.texts if text.startswith("Snake")]
        assert "board 5x5" in statuses[0]
        assert "board 3x3" in statuses[-1]
        assert not any("board 14x10" in text for text in statuses)
