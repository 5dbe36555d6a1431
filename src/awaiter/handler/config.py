r"""Configuration dataclass for waiter callbacks."""

from __future__ import annotations

__all__ = ["CallbackConfig"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from awaiter.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo


@dataclass(frozen=True)
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_attempt: Optional callback invoked before each polling attempt.
        on_retry: Optional callback invoked before waiting for the next attempt.
        on_success: Optional callback invoked when the waiter succeeds.
        on_failure: Optional callback invoked when the waiter fails.
    """

    on_attempt: Callable[[AttemptInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None
