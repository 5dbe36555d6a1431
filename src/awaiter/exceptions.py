r"""Exceptions raised by waiters.

Every terminal failure of a waiter is reported with exactly one of the
exceptions below. They all derive from ``WaiterError`` so callers can
catch the whole family at once.
"""

from __future__ import annotations

__all__ = [
    "AcceptorFailureError",
    "MissingConfigurationError",
    "RetriesExhaustedError",
    "UnmatchedFailureError",
    "WaiterError",
    "WaiterInterruptedError",
]


class WaiterError(Exception):
    """Base class for waiter errors.

    Args:
        message: A descriptive error message.
        attempts: Number of polling attempts executed before the error,
            or ``None`` when no attempt was made.

    Example:
        ```pycon
        >>> from awaiter.exceptions import WaiterError
        >>> error = WaiterError("waiter failed", attempts=3)
        >>> error.attempts
        3

        ```
    """

    def __init__(self, message: str, attempts: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.attempts = attempts


class MissingConfigurationError(WaiterError, ValueError):
    """Raised when a required configuration value is absent."""


class AcceptorFailureError(WaiterError):
    """Raised when an acceptor matched and targeted the failure state."""


class UnmatchedFailureError(WaiterError):
    """Raised when the polling operation failed and no acceptor matched
    the exception."""


class RetriesExhaustedError(WaiterError):
    """Raised when the waiter reached its maximum number of attempts.

    Args:
        message: A descriptive error message.
        max_attempts: The configured attempt limit that was reached.
        attempts: Number of polling attempts executed.
    """

    def __init__(self, message: str, max_attempts: int, attempts: int | None = None) -> None:
        super().__init__(message, attempts=attempts)
        self.max_attempts = max_attempts


class WaiterInterruptedError(WaiterError):
    """Raised when a blocking wait between two attempts was cancelled."""
