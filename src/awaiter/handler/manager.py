r"""Callback manager for orchestrating waiter lifecycle events."""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING, Any

from awaiter.callbacks import (
    invoke_on_attempt,
    invoke_on_failure,
    invoke_on_retry,
    invoke_on_success,
)
from awaiter.handler.config import CallbackConfig

if TYPE_CHECKING:
    from awaiter.response import WaiterResponse


class CallbackManager:
    """Manages callback invocations during the waiter lifecycle.

    Attributes:
        callbacks: Configuration containing callback functions for
            lifecycle events.
        max_attempts: Maximum number of attempts, reported to every
            callback.
    """

    def __init__(self, callbacks: CallbackConfig | None, max_attempts: int) -> None:
        self.callbacks = callbacks if callbacks is not None else CallbackConfig()
        self.max_attempts = max_attempts

    def on_attempt(self, attempt: int) -> None:
        """Invoke on_attempt callback.

        Args:
            attempt: The attempt about to be executed (1-indexed).
        """
        invoke_on_attempt(
            self.callbacks.on_attempt, attempt=attempt, max_attempts=self.max_attempts
        )

    def on_retry(
        self,
        attempt: int,
        wait_time: float,
        value: Any,
        exception: BaseException | None,
    ) -> None:
        """Invoke on_retry callback.

        Args:
            attempt: The attempt that just completed (1-indexed).
            wait_time: The delay before the next attempt.
            value: The value returned by the completed attempt.
            exception: The exception raised by the completed attempt.
        """
        invoke_on_retry(
            self.callbacks.on_retry,
            attempt=attempt,
            max_attempts=self.max_attempts,
            wait_time=wait_time,
            value=value,
            exception=exception,
        )

    def on_success(self, attempt: int, response: WaiterResponse, start_time: float) -> None:
        """Invoke on_success callback.

        Args:
            attempt: The attempt that matched a success acceptor (1-indexed).
            response: The waiter response.
            start_time: Timestamp when the execution started.
        """
        invoke_on_success(
            self.callbacks.on_success,
            attempt=attempt,
            max_attempts=self.max_attempts,
            response=response,
            start_time=start_time,
        )

    def on_failure(self, attempt: int, error: Exception, start_time: float) -> None:
        """Invoke on_failure callback.

        Args:
            attempt: The final attempt number (1-indexed).
            error: The error terminating the waiter.
            start_time: Timestamp when the execution started.
        """
        invoke_on_failure(
            self.callbacks.on_failure,
            attempt=attempt,
            max_attempts=self.max_attempts,
            error=error,
            start_time=start_time,
        )
