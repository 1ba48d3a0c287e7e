# main.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .config import DEFAULT_COLUMNS, DEFAULT_ROWS, TICK_MS, RESTART_DELAY_MS, Config, ConfigurationError

logger = logging.getLogger(__name__)

WINDOW_DEFAULT_ROWS, WINDOW_DEFAULT_COLUMNS = 30, 30


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snake", description="Snake on a grid.")
    parser.add_argument(
        "--frontend",
        choices=["terminal", "window"],
        default="terminal",
        help="terminal (curses) or window (pygame)",
    )
    parser.add_argument("--rows", type=int, default=None,
                        help="board rows (terminal: defaults to the terminal height)")
    parser.add_argument("--columns", type=int, default=None,
                        help="board columns (terminal: defaults to the terminal width)")
    parser.add_argument("--tick-ms", type=int, default=TICK_MS, help="milliseconds per tick")
    parser.add_argument("--restart-delay-ms", type=int, default=RESTART_DELAY_MS,
                        help="terminal: pause on the game-over screen before a new game")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible games")
    parser.add_argument("--log-file", type=str, default=None,
                        help="write logs here (the terminal belongs to the game)")
    parser.add_argument("--verbose", action="store_true", help="debug-level logging")
    return parser


def configure_logging(log_file: Optional[str], verbose: bool) -> None:
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def config_from_args(args: argparse.Namespace) -> Config:
    if args.frontend == "window":
        default_rows, default_columns = WINDOW_DEFAULT_ROWS, WINDOW_DEFAULT_COLUMNS
    else:
        default_rows, default_columns = DEFAULT_ROWS, DEFAULT_COLUMNS
    return Config(
        seed=args.seed,
        rows=args.rows if args.rows is not None else default_rows,
        columns=args.columns if args.columns is not None else default_columns,
        tick_ms=args.tick_ms,
        restart_delay_ms=args.restart_delay_ms,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    try:
        cfg = config_from_args(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    logger.info("starting %s frontend, board %dx%d, tick %dms",
                args.frontend, cfg.columns, cfg.rows, cfg.tick_ms)

    try:
        if args.frontend == "window":
            from .window import run as run_window
            run_window(cfg)
        else:
            import curses
            from .terminal import run as run_terminal
            fit = args.rows is None and args.columns is None
            curses.wrapper(run_terminal, cfg, fit)
    except ConfigurationError as exc:
        parser.error(str(exc))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
