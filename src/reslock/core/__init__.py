"""Core module - Foundation components with no internal dependencies.

This module provides the basic building blocks used throughout the package:
- Version information
- Custom exceptions
- Configuration dataclasses
- Constants and defaults
- Logging setup
"""

from reslock.core.version import __version__

from reslock.core.exceptions import (
    ResLockError,
    ConfigurationError,
    LockTimeoutError,
)

from reslock.core.config import (
    LockConfig,
    LogConfig,
)

from reslock.core.constants import (
    DEFAULT_MAX_PAUSE,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_HOLD_SECONDS,
    LOG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
    EXIT_OK,
    EXIT_USAGE,
    EXIT_LOCK_UNAVAILABLE,
    default_lock_store,
)

from reslock.core.logging import (
    JSONFormatter,
    ContextLoggerAdapter,
    setup_logging,
    with_log_context,
)

__all__ = [
    # Version
    '__version__',
    # Exceptions
    'ResLockError',
    'ConfigurationError',
    'LockTimeoutError',
    # Config dataclasses
    'LockConfig',
    'LogConfig',
    # Constants
    'DEFAULT_MAX_PAUSE',
    'DEFAULT_MAX_ATTEMPTS',
    'DEFAULT_MAX_HOLD_SECONDS',
    'LOG_FILE_MAX_BYTES',
    'LOG_FILE_BACKUP_COUNT',
    'EXIT_OK',
    'EXIT_USAGE',
    'EXIT_LOCK_UNAVAILABLE',
    'default_lock_store',
    # Logging
    'JSONFormatter',
    'ContextLoggerAdapter',
    'setup_logging',
    'with_log_context',
]
