"""Configuration dataclasses for reslock.

These dataclasses centralize the tunables of the lock and of logging.
They can be built from defaults, environment variables or parsed
command-line arguments.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from reslock.core.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_HOLD_SECONDS,
    DEFAULT_MAX_PAUSE,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    ENV_MAX_ATTEMPTS,
    ENV_MAX_HOLD_SECONDS,
    ENV_MAX_PAUSE,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_MAX_BYTES,
    MIN_PAUSE_DIVISOR,
    VALID_LOG_FORMATS,
    VALID_LOG_LEVELS,
)
from reslock.core.exceptions import ConfigurationError


def _env_number(environ: Mapping[str, str], name: str, cast: type) -> Any:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {name}", field=name, details=repr(raw)) from e


@dataclass(frozen=True)
class LockConfig:
    """Tunables for lock acquisition and stale-lock reclamation.

    Attributes:
        max_pause: Upper bound of one randomized wait, in seconds (default: 0.01)
        max_attempts: Number of pauses the time budget allows (default: 10)
        max_hold_seconds: Marker age at which a lock is considered abandoned (default: 6)
    """

    max_pause: float = DEFAULT_MAX_PAUSE
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    max_hold_seconds: float = DEFAULT_MAX_HOLD_SECONDS

    @property
    def min_pause(self) -> float:
        return self.max_pause / MIN_PAUSE_DIVISOR

    @property
    def timeout_budget(self) -> float:
        """Total time acquisition may spend waiting."""
        return self.max_pause * self.max_attempts

    def validate(self) -> LockConfig:
        if self.max_pause <= 0:
            raise ConfigurationError("max_pause must be positive", field="max_pause", details=str(self.max_pause))
        if self.max_attempts < 1:
            raise ConfigurationError(
                "max_attempts must be at least 1", field="max_attempts", details=str(self.max_attempts)
            )
        if self.max_hold_seconds <= 0:
            raise ConfigurationError(
                "max_hold_seconds must be positive", field="max_hold_seconds", details=str(self.max_hold_seconds)
            )
        return self

    def with_overrides(
        self,
        *,
        max_pause: float | None = None,
        max_attempts: int | None = None,
        max_hold_seconds: float | None = None,
    ) -> LockConfig:
        """Return a validated copy with any non-None values replaced."""
        changes = {
            key: value
            for key, value in (
                ("max_pause", max_pause),
                ("max_attempts", max_attempts),
                ("max_hold_seconds", max_hold_seconds),
            )
            if value is not None
        }
        if not changes:
            return self
        return replace(self, **changes).validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_pause": self.max_pause,
            "max_attempts": self.max_attempts,
            "max_hold_seconds": self.max_hold_seconds,
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LockConfig:
        """Create configuration from RESLOCK_* environment variables."""
        env = os.environ if environ is None else environ
        return cls().with_overrides(
            max_pause=_env_number(env, ENV_MAX_PAUSE, float),
            max_attempts=_env_number(env, ENV_MAX_ATTEMPTS, int),
            max_hold_seconds=_env_number(env, ENV_MAX_HOLD_SECONDS, float),
        ).validate()

    @classmethod
    def from_args(cls, args: argparse.Namespace, environ: Mapping[str, str] | None = None) -> LockConfig:
        """Create configuration from parsed arguments, falling back to the environment."""
        return cls.from_env(environ).with_overrides(
            max_pause=getattr(args, "max_pause", None),
            max_attempts=getattr(args, "max_attempts", None),
            max_hold_seconds=getattr(args, "max_hold", None),
        )


@dataclass
class LogConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level string (default: "INFO")
        format: "text" or "json" (default: "text")
        file: Optional log file path; console only when None
        file_max_bytes: Maximum size per log file (default: 10MB)
        file_backup_count: Number of backup log files (default: 5)
    """

    level: str = "INFO"
    format: str = "text"
    file: str | None = None
    file_max_bytes: int = LOG_FILE_MAX_BYTES
    file_backup_count: int = LOG_FILE_BACKUP_COUNT

    def validate(self) -> LogConfig:
        if self.level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level '{self.level}'", field="level")
        if self.format.lower() not in VALID_LOG_FORMATS:
            raise ConfigurationError(f"Invalid log format '{self.format}'", field="format")
        return self

    @classmethod
    def from_args(cls, args: argparse.Namespace, environ: Mapping[str, str] | None = None) -> LogConfig:
        """Priority: 1) command-line flag, 2) LOG_LEVEL/LOG_FORMAT, 3) defaults."""
        env = os.environ if environ is None else environ
        return cls(
            level=getattr(args, "log_level", None) or env.get(ENV_LOG_LEVEL) or "INFO",
            format=getattr(args, "log_format", None) or env.get(ENV_LOG_FORMAT) or "text",
            file=getattr(args, "log_file", None),
        ).validate()
