"""CLI module - Command-line interface components.

The entry point is ``reslock.cli.main.main``.
"""

from reslock.cli.parser import build_parser, parse_arguments

__all__ = [
    "build_parser",
    "parse_arguments",
]
