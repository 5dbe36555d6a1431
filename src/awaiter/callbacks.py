r"""Lifecycle hooks of a waiter.

Each hook receives one immutable record describing the event:
``AttemptInfo`` before a poll, ``RetryInfo`` before a backoff wait,
then ``SuccessInfo`` or ``FailureInfo`` once the waiter is done.

Example:
    ```pycon
    >>> from awaiter import Waiter
    >>> from awaiter.acceptor import success_on_value
    >>> from awaiter.backoff import ConstantBackoff
    >>> from awaiter.callbacks import RetryInfo
    >>> from awaiter.handler import CallbackConfig
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"attempt {info.attempt}/{info.max_attempts}, waiting {info.wait_time}s")
    ...
    >>> waiter = (
    ...     Waiter.builder()
    ...     .add_acceptor(success_on_value(lambda value: value == "done"))
    ...     .polling_strategy(max_attempts=3, backoff_strategy=ConstantBackoff(0.0))
    ...     .callbacks(CallbackConfig(on_retry=log_retry))
    ...     .build()
    ... )
    >>> responses = iter(["pending", "done"])
    >>> waiter.run(lambda: next(responses)).attempts_executed
    attempt 1/3, waiting 0.0s
    2

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptInfo",
    "FailureInfo",
    "RetryInfo",
    "SuccessInfo",
    "invoke_on_attempt",
    "invoke_on_failure",
    "invoke_on_retry",
    "invoke_on_success",
]

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from awaiter.response import WaiterResponse


@dataclass(frozen=True)
class AttemptInfo:
    """Record of a poll about to run. ``attempt`` counts from 1."""

    attempt: int
    max_attempts: int


@dataclass(frozen=True)
class RetryInfo:
    """Record of a poll that did not end the waiter.

    ``value`` or ``exception`` holds what the poll produced, and
    ``wait_time`` is the backoff delay in seconds before the next poll.
    """

    attempt: int
    max_attempts: int
    wait_time: float
    value: Any
    exception: BaseException | None


@dataclass(frozen=True)
class SuccessInfo:
    """Record of a waiter reaching its success state.

    ``total_time`` is the wall time in seconds since the waiter started,
    backoff waits included.
    """

    attempt: int
    max_attempts: int
    response: WaiterResponse
    total_time: float


@dataclass(frozen=True)
class FailureInfo:
    """Record of a waiter ending with ``error``."""

    attempt: int
    max_attempts: int
    error: Exception
    total_time: float


def invoke_on_attempt(
    on_attempt: Callable[[AttemptInfo], None] | None,
    *,
    attempt: int,
    max_attempts: int,
) -> None:
    """Call ``on_attempt`` unless it is ``None``."""
    if on_attempt is not None:
        on_attempt(AttemptInfo(attempt=attempt, max_attempts=max_attempts))


def invoke_on_retry(
    on_retry: Callable[[RetryInfo], None] | None,
    *,
    attempt: int,
    max_attempts: int,
    wait_time: float,
    value: Any,
    exception: BaseException | None,
) -> None:
    """Call ``on_retry`` with a ``RetryInfo`` unless it is ``None``."""
    if on_retry is not None:
        on_retry(
            RetryInfo(
                attempt=attempt,
                max_attempts=max_attempts,
                wait_time=wait_time,
                value=value,
                exception=exception,
            )
        )


def invoke_on_success(
    on_success: Callable[[SuccessInfo], None] | None,
    *,
    attempt: int,
    max_attempts: int,
    response: WaiterResponse,
    start_time: float,
) -> None:
    if on_success is not None:
        on_success(
            SuccessInfo(
                attempt=attempt,
                max_attempts=max_attempts,
                response=response,
                total_time=time.time() - start_time,
            )
        )


def invoke_on_failure(
    on_failure: Callable[[FailureInfo], None] | None,
    *,
    attempt: int,
    max_attempts: int,
    error: Exception,
    start_time: float,
) -> None:
    if on_failure is not None:
        on_failure(
            FailureInfo(
                attempt=attempt,
                max_attempts=max_attempts,
                error=error,
                total_time=time.time() - start_time,
            )
        )
