"""
reslock - Advisory cross-process locks for named resources

Locks any cooperatively named resource (a file, a table, a job) by
creating a marker directory in a shared lock store. Works across
processes on every platform where directory creation is atomic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from reslock.core.config import LockConfig
from reslock.core.exceptions import ConfigurationError, LockTimeoutError, ResLockError
from reslock.core.version import __version__
from reslock.locks import DirectoryMarkerBackend, LockHandle, ResLock, identify

__all__ = [
    "ConfigurationError",
    "DirectoryMarkerBackend",
    "LockConfig",
    "LockHandle",
    "LockTimeoutError",
    "ResLock",
    "ResLockError",
    "__version__",
    "identify",
    "main",
]

if TYPE_CHECKING:
    from reslock.cli.main import main


def __getattr__(name: str) -> Any:
    # The CLI pulls in argparse/dotenv/argcomplete; load it only on demand.
    if name == "main":
        from reslock.cli import main as cli_main

        return cli_main.main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
