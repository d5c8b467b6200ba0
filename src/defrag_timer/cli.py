"""Command-line interface for Defrag Timer."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Optional

from defrag_timer.blocks import InvalidConfiguration
from defrag_timer.config import load_config
from defrag_timer.duration import DurationError, parse_duration
from defrag_timer.logging_setup import init_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="defrag-timer",
        description="Countdown timer disguised as a disk defragmenter",
    )
    parser.add_argument(
        "--minutes",
        type=int,
        default=None,
        help="Initial target minutes (default from config, 5)",
    )
    parser.add_argument(
        "--seconds",
        type=int,
        default=None,
        help="Initial target seconds, 0-59 (default from config, 0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the block layout shuffle",
    )
    return parser


def _run_tui(
    minutes: Optional[int], seconds: Optional[int], seed: Optional[int]
) -> int:
    try:
        from defrag_timer.tui import run_tui
    except (ImportError, RuntimeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    try:
        return run_tui(
            config=load_config(), minutes=minutes, seconds=seconds, seed=seed
        )
    except InvalidConfiguration as exc:
        logger.error("Invalid configuration: %s", exc)
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.minutes is not None or args.seconds is not None:
        config = load_config()
        minutes = config.minutes if args.minutes is None else args.minutes
        seconds = config.seconds if args.seconds is None else args.seconds
        try:
            parse_duration(str(minutes), str(seconds))
        except DurationError as exc:
            parser.error(str(exc))
        args.minutes, args.seconds = minutes, seconds

    init_logging()
    logger.info("App start")

    def excepthook(exc_type, exc, tb) -> None:
        logger.exception("Uncaught exception", exc_info=(exc_type, exc, tb))

    sys.excepthook = excepthook

    exit_code = _run_tui(args.minutes, args.seconds, args.seed)
    logger.info("App exit code=%s", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
