r"""Polling strategy: how many attempts and how long to wait between them."""

from __future__ import annotations

__all__ = ["PollingStrategy"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

from awaiter.exceptions import MissingConfigurationError

if TYPE_CHECKING:
    from awaiter.backoff import BaseBackoffStrategy


@dataclass(frozen=True)
class PollingStrategy:
    """Maximum number of attempts paired with a backoff strategy.

    Both fields are required. There is no default attempt limit.

    Args:
        max_attempts: Maximum number of polling attempts before the waiter
            fails. Must be >= 1.
        backoff_strategy: Strategy computing the delay before the next
            attempt.

    Raises:
        MissingConfigurationError: If a field is ``None``.
        ValueError: If ``max_attempts`` is not a positive integer.

    Example:
        ```pycon
        >>> from awaiter.backoff import ConstantBackoff
        >>> from awaiter.polling import PollingStrategy
        >>> strategy = PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(0.5))
        >>> strategy.max_attempts
        3

        ```
    """

    max_attempts: int
    backoff_strategy: BaseBackoffStrategy

    def __post_init__(self) -> None:
        if self.max_attempts is None:
            msg = "max_attempts is required"
            raise MissingConfigurationError(msg)
        if self.backoff_strategy is None:
            msg = "backoff_strategy is required"
            raise MissingConfigurationError(msg)
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, int):
            msg = f"max_attempts must be an int, got {type(self.max_attempts).__name__}"
            raise ValueError(msg)
        if self.max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {self.max_attempts}"
            raise ValueError(msg)
