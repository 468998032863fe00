"""CLI argument parsing."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

import argcomplete

from reslock.core.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_HOLD_SECONDS,
    DEFAULT_MAX_PAUSE,
    ENV_LOCK_DIR,
    VALID_LOG_FORMATS,
    VALID_LOG_LEVELS,
)
from reslock.core.version import __version__


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reslock",
        description="Advisory cross-process locks for named resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Run a command while holding the lock on a shared file
  reslock run reports.csv -- python build_report.py

  # Wait up to 30s (0.5s pauses x 60) for the lock
  reslock --max-pause 0.5 --max-attempts 60 run nightly-import -- ./import.sh

  # Inspect and clean up the lock store
  reslock status reports.csv
  reslock sweep

Environment:
  {ENV_LOCK_DIR}, RESLOCK_MAX_PAUSE, RESLOCK_MAX_ATTEMPTS, RESLOCK_MAX_HOLD_SECONDS,
  LOG_LEVEL and LOG_FORMAT are read from the environment or a .env file.
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--lock-dir",
        metavar="PATH",
        help=f"Lock store directory (default: ${ENV_LOCK_DIR} or <tempdir>/reslock)",
    )

    tuning = parser.add_argument_group("lock tuning")
    tuning.add_argument(
        "--max-pause",
        type=_positive_float,
        metavar="SECONDS",
        help=f"Longest random pause between attempts (default: {DEFAULT_MAX_PAUSE})",
    )
    tuning.add_argument(
        "--max-attempts",
        type=_positive_int,
        metavar="N",
        help=f"Pauses allowed before giving up (default: {DEFAULT_MAX_ATTEMPTS})",
    )
    tuning.add_argument(
        "--max-hold",
        type=_positive_float,
        metavar="SECONDS",
        help=f"Age after which a lock counts as abandoned (default: {DEFAULT_MAX_HOLD_SECONDS:g})",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument("--log-level", type=str.upper, choices=VALID_LOG_LEVELS, help="Default: INFO")
    logging_group.add_argument("--log-format", type=str.lower, choices=VALID_LOG_FORMATS, help="Default: text")
    logging_group.add_argument("--log-file", metavar="PATH", help="Also log to a rotating file")

    subparsers = parser.add_subparsers(dest="command_name", metavar="COMMAND", required=True)

    run = subparsers.add_parser(
        "run",
        help="Run a command while holding a lock",
        description=(
            "Run COMMAND while holding the lock on NAME. Locks older than --max-hold "
            "seconds are treated as abandoned, so a command that runs longer can lose "
            "its lock to another process; raise --max-hold above the longest expected run."
        ),
    )
    run.add_argument("name", help="Resource name agreed on by all cooperating processes")
    run.add_argument("command", nargs=argparse.REMAINDER, help="Command to run, after '--'")

    status = subparsers.add_parser("status", help="Show whether resources are locked")
    status.add_argument("names", nargs="+", metavar="NAME")
    status.add_argument("--json", action="store_true", help="Print one JSON object per resource")

    subparsers.add_parser("sweep", help="Remove abandoned locks from the lock store")

    identify = subparsers.add_parser("identify", help="Print marker identifier and path")
    identify.add_argument("names", nargs="+", metavar="NAME")

    return parser


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
