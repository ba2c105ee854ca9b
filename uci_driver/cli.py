"""
Command line front end.

Usage:
    python -m uci_driver ENGINE [--fen FEN] [--moves M ...]
                                [--movetime MS | --depth N]
                                [--option NAME=VALUE ...]
                                [--timeout SECONDS] [--command TEXT]
                                [--verbose]

Prints the engine's best move for the position, or the output of --command.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from uci_driver.config import EngineConfig, SearchBudget
from uci_driver.engine import Engine
from uci_driver.errors import EngineError


def setup_logger(verbose: bool = False) -> logging.Logger:
    """
    Send uci_driver log records to stderr.

    Args:
        verbose: If True, log at DEBUG level (every engine line);
            otherwise INFO level (commands only)

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("uci_driver")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def parse_option(text: str) -> Tuple[str, str]:
    """Split NAME=VALUE on the first '='."""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    return name.strip(), value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uci-driver",
        description="Ask a UCI chess engine for its best move",
    )
    parser.add_argument("engine", help="Path to the engine executable")
    parser.add_argument("--fen", help="Start from this FEN instead of the initial position")
    parser.add_argument("--moves", nargs="*", default=[], help="Moves in coordinate notation")

    budget = parser.add_mutually_exclusive_group()
    budget.add_argument("--movetime", type=int, help="Think time in milliseconds (default: 100)")
    budget.add_argument("--depth", type=int, help="Fixed search depth in plies")

    parser.add_argument(
        "--option", type=parse_option, action="append", default=[],
        metavar="NAME=VALUE", help="Engine option, may be repeated",
    )
    parser.add_argument("--timeout", type=float, help="Seconds to wait for each engine line")
    parser.add_argument("--command", help="Send this text instead of searching and print the output")
    parser.add_argument("--no-greeting", action="store_true",
                        help="Engine prints nothing before 'uci'")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every engine line")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger(verbose=args.verbose)

    try:
        if args.depth is not None:
            budget = SearchBudget.by_depth(args.depth)
        elif args.movetime is not None:
            budget = SearchBudget.by_time(args.movetime)
        else:
            budget = SearchBudget()

        config = EngineConfig(
            budget=budget,
            read_timeout=args.timeout,
            expect_greeting=not args.no_greeting,
        )

        with Engine(args.engine, config) as engine:
            for name, value in args.option:
                engine.set_option(name, value)

            if args.command:
                print(engine.command(args.command))
                return 0

            if args.fen:
                engine.make_moves_from_position(args.fen, args.moves)
            else:
                engine.make_moves(args.moves)

            print(engine.bestmove())

    except (EngineError, ValueError) as e:
        logger.error(f"{e}")
        return 1

    return 0
