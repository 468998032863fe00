"""Custom exceptions for reslock.

The lock primitives themselves never raise for contention or filesystem
races; these exceptions cover configuration problems and the
raise-on-failure convenience layer.
"""


class ResLockError(Exception):
    """Base exception for all reslock errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(ResLockError):
    """Exception raised for invalid lock or logging configuration.

    Examples:
        - Non-positive pause, attempt count or hold duration
        - Unparseable numeric environment variable
        - Unknown log level or format
    """

    def __init__(self, message: str, field: str | None = None, details: str | None = None):
        self.field = field
        super().__init__(message, details)


class LockTimeoutError(ResLockError):
    """Raised by ``ResLock.hold`` when the time budget runs out.

    ``ResLock.lock`` reports the same situation by returning ``None``.
    """

    def __init__(self, resource_name: str, budget_seconds: float | None = None, details: str | None = None):
        self.resource_name = resource_name
        self.budget_seconds = budget_seconds
        message = f"Unable to lock resource '{resource_name}'"
        if budget_seconds is not None and details is None:
            details = f"gave up after {budget_seconds:.3f}s"
        super().__init__(message, details)
