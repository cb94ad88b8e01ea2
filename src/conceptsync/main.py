#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from conceptsync.app import sync_ocl_collection
from conceptsync.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Must be at least 1: {value}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Synchronise an OCL collection with the concepts reachable from a seed list"
    )
    parser.add_argument(
        "--concept-file",
        type=str,
        help="Newline-delimited file of seed concept ids (defaults to OCL_CONCEPT_FILE)",
    )
    parser.add_argument(
        "--concurrency",
        type=_positive_int,
        help="Maximum number of concept fetches in flight (defaults to config)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute the reference changes without writing them to the collection",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every request at DEBUG level",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        sync_ocl_collection(
            concept_file=parsed_args.concept_file,
            concurrency=parsed_args.concurrency,
            dry_run=parsed_args.dry_run,
        )
    except ConfigurationError as exc:
        log.error("Configuration error: %s", exc)
        log.error("%s", exc.hint)
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
