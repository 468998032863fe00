"""Constants and default values for reslock.

This module centralizes the tunable defaults, environment variable names
and exit codes used throughout the package.
"""

import os
import tempfile

# ==================== LOCK DEFAULTS ====================

DEFAULT_MAX_PAUSE: float = 0.01  # Longest single wait between attempts (10ms)
DEFAULT_MAX_ATTEMPTS: int = 10  # Budget is max_pause * max_attempts
DEFAULT_MAX_HOLD_SECONDS: float = 6.0  # Markers this old are reclaimable
MIN_PAUSE_DIVISOR: int = 10  # Shortest wait is max_pause / 10

# Directory and marker permissions (owner only)
LOCK_STORE_MODE: int = 0o700
MARKER_MODE: int = 0o700

LOCK_STORE_DIRNAME: str = "reslock"


def default_lock_store() -> str:
    """Return the default lock store under the platform temp directory."""
    return os.path.join(tempfile.gettempdir(), LOCK_STORE_DIRNAME)


# ==================== LOGGING DEFAULTS ====================

LOG_FILE_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB max per log file
LOG_FILE_BACKUP_COUNT: int = 5  # Number of backup log files to keep
VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_LOG_FORMATS: tuple[str, ...] = ("text", "json")

# ==================== ENVIRONMENT ====================

ENV_LOCK_DIR = "RESLOCK_DIR"
ENV_MAX_PAUSE = "RESLOCK_MAX_PAUSE"
ENV_MAX_ATTEMPTS = "RESLOCK_MAX_ATTEMPTS"
ENV_MAX_HOLD_SECONDS = "RESLOCK_MAX_HOLD_SECONDS"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_FORMAT = "LOG_FORMAT"

# ==================== EXIT CODES ====================

EXIT_OK: int = 0
EXIT_USAGE: int = 2
EXIT_LOCK_UNAVAILABLE: int = 75  # EX_TEMPFAIL from sysexits.h
EXIT_COMMAND_NOT_FOUND: int = 127
