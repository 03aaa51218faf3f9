#!/usr/bin/env python3
"""
Run the hexfleet bot against the referee.

Commands go to stdout, diagnostics to stderr.

Usage:
    hexfleet
    hexfleet --input recorded_turns.txt --quiet
    hexfleet --idle-mode wander --seed0 0x1 --seed1 0x2
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .captain import Captain, IdleMode
from .config import BotConfig, load_config
from .hexgrid import OffsetCoord
from .prng import SeededRandom
from .protocol import ProtocolError, iter_turns, write_commands

logger = logging.getLogger("hexfleet")

EXIT_OK = 0
EXIT_PROTOCOL_ERROR = 2


def _seed(value: str) -> int:
    return int(value, 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hexfleet",
        description="Hex-grid naval skirmish bot: reads referee turns, writes MOVE/FIRE orders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    hexfleet < turns.txt
    hexfleet --input turns.txt --max-turns 10 --log-level INFO
        """,
    )
    parser.add_argument(
        "--input",
        metavar="FILE",
        help="Replay referee input from a file instead of stdin",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help="Maximum turns to play (default: HEXFLEET_MAX_TURNS or 200)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Disable diagnostics on stderr",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Diagnostics level (default: HEXFLEET_LOG_LEVEL or DEBUG)",
    )
    parser.add_argument("--seed0", type=_seed, default=None, help="First PRNG seed word")
    parser.add_argument("--seed1", type=_seed, default=None, help="Second PRNG seed word")
    parser.add_argument(
        "--idle-mode",
        choices=[mode.value for mode in IdleMode],
        default=None,
        help="Behaviour with no barrel in sight",
    )
    return parser


def configure_logging(config: BotConfig) -> None:
    """Send diagnostics to stderr, or silence them entirely."""
    logger.propagate = False
    if not config.log_enabled:
        logger.handlers[:] = [logging.NullHandler()]
        logger.setLevel(logging.CRITICAL + 1)
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(config.log_level)


def merge_args(config: BotConfig, args: argparse.Namespace) -> BotConfig:
    """Command-line flags override environment settings."""
    return BotConfig(
        log_enabled=config.log_enabled and not args.quiet,
        log_level=args.log_level or config.log_level,
        max_turns=args.max_turns if args.max_turns is not None else config.max_turns,
        seed0=args.seed0 if args.seed0 is not None else config.seed0,
        seed1=args.seed1 if args.seed1 is not None else config.seed1,
        idle_x=config.idle_x,
        idle_y=config.idle_y,
        idle_mode=IdleMode(args.idle_mode) if args.idle_mode else config.idle_mode,
    )


def build_captain(config: BotConfig) -> Captain:
    return Captain(
        rng=SeededRandom(config.seed0, config.seed1),
        idle_destination=OffsetCoord(config.idle_x, config.idle_y),
        idle_mode=config.idle_mode,
    )


def play(source: TextIO, sink: TextIO, config: BotConfig) -> int:
    """
    Play turns from source, writing orders to sink.

    Returns:
        Process exit status.
    """
    captain = build_captain(config)
    try:
        captain.run(
            iter_turns(source),
            lambda commands: write_commands(commands, sink),
            max_turns=config.max_turns,
        )
    except ProtocolError as e:
        logger.error("Bad referee input on turn %d: %s", captain.turn, e)
        return EXIT_PROTOCOL_ERROR
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = merge_args(load_config(), args)
    configure_logging(config)

    if args.input:
        with open(args.input) as f:
            return play(f, sys.stdout, config)
    return play(sys.stdin, sys.stdout, config)


if __name__ == "__main__":
    sys.exit(main())
