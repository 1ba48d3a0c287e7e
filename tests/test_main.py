"""
Tests for snake.main - the command line entry point.
"""

import pytest

from snake.main import build_parser, config_from_args, main


class TestConfigFromArgs:
    """CLI flags to Config."""

    def test_terminal_defaults(self):
        cfg = config_from_args(build_parser().parse_args([]))
        assert (cfg.rows, cfg.columns) == (50, 50)
        assert cfg.seed is None

    def test_window_defaults(self):
        cfg = config_from_args(build_parser().parse_args(["--frontend", "window"]))
        assert (cfg.rows, cfg.columns) == (30, 30)

    def test_explicit_values(self):
        args = build_parser().parse_args(
            ["--rows", "12", "--columns", "20", "--tick-ms", "80", "--seed", "3"]
        )
        cfg = config_from_args(args)
        assert (cfg.rows, cfg.columns, cfg.tick_ms, cfg.seed) == (12, 20, 80, 3)


class TestMain:
    """Bad settings exit through argparse before any screen is touched."""

    @pytest.mark.parametrize("argv", [
        ["--rows", "0"],
        ["--tick-ms", "0"],
        ["--rows", "1", "--columns", "1"],
    ])
    def test_configuration_error_exits_with_usage(self, argv, capsys):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 2
        assert "snake" in capsys.readouterr().err

    def test_unknown_frontend(self):
        with pytest.raises(SystemExit):
            main(["--frontend", "web"])
