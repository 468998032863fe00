"""CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import os
import subprocess
import sys
import time
from collections.abc import Callable, Sequence

from dotenv import load_dotenv

from reslock.cli.parser import parse_arguments
from reslock.core.config import LockConfig, LogConfig
from reslock.core.constants import (
    ENV_LOCK_DIR,
    EXIT_COMMAND_NOT_FOUND,
    EXIT_LOCK_UNAVAILABLE,
    EXIT_OK,
    EXIT_USAGE,
)
from reslock.core.exceptions import ConfigurationError, LockTimeoutError
from reslock.core.logging import setup_logging
from reslock.locks import ResLock, identify

logger = logging.getLogger(__name__)


def _cmd_run(args: argparse.Namespace, reslock: ResLock) -> int:
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        print("Error: no command given (usage: reslock run NAME -- COMMAND...)", file=sys.stderr)
        return EXIT_USAGE

    try:
        with reslock.hold(args.name) as handle:
            logger.info("Holding '%s'; running %s", args.name, command[0])
            started = time.monotonic()
            try:
                completed = subprocess.run(command, check=False)
            except FileNotFoundError:
                logger.error("Command not found: %s", command[0])
                return EXIT_COMMAND_NOT_FOUND
            elapsed = time.monotonic() - started
            max_hold = reslock.config.max_hold_seconds
            if elapsed >= max_hold:
                logger.warning(
                    "Command held '%s' for %.1fs, past the %.1fs hold limit; "
                    "other processes may have reclaimed the lock while it ran (see --max-hold)",
                    args.name,
                    elapsed,
                    max_hold,
                )
            logger.debug("Command exited with %d; releasing %s", completed.returncode, handle.identifier)
            return completed.returncode
    except LockTimeoutError as e:
        logger.error("%s", e)
        return EXIT_LOCK_UNAVAILABLE


def _cmd_status(args: argparse.Namespace, reslock: ResLock) -> int:
    for name in args.names:
        age = reslock.marker_age(name)
        row = {
            "name": name,
            "identifier": identify(name),
            "path": str(reslock.path_for(name)),
            "locked": age is not None,
            "age_seconds": None if age is None else round(age, 3),
            "stale": age is not None and age >= reslock.config.max_hold_seconds,
        }
        if args.json:
            print(json.dumps(row))
            continue
        state = "free"
        if row["locked"]:
            state = f"locked ({row['age_seconds']:.1f}s{', stale' if row['stale'] else ''})"
        print(f"{name}\t{row['identifier']}\t{state}")
    return EXIT_OK


def _cmd_sweep(args: argparse.Namespace, reslock: ResLock) -> int:
    del args
    removed = reslock.sweep()
    print(f"Removed {removed} stale lock(s) from {reslock.lock_store}")
    return EXIT_OK


def _cmd_identify(args: argparse.Namespace, reslock: ResLock) -> int:
    for name in args.names:
        print(f"{identify(name)}\t{reslock.path_for(name)}")
    return EXIT_OK


COMMANDS: dict[str, Callable[[argparse.Namespace, ResLock], int]] = {
    "run": _cmd_run,
    "status": _cmd_status,
    "sweep": _cmd_sweep,
    "identify": _cmd_identify,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the reslock command"""
    load_dotenv()
    args = parse_arguments(argv)

    try:
        log_config = LogConfig.from_args(args)
        lock_config = LockConfig.from_args(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(log_config)
    logger.debug("Lock settings: %s", lock_config.to_dict())

    lock_dir = args.lock_dir or os.environ.get(ENV_LOCK_DIR) or None
    with ResLock(lock_dir, config=lock_config) as reslock:
        return COMMANDS[args.command_name](args, reslock)
