r"""Base classes for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "CappedBackoff"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Base class of every backoff strategy.

    A waiter calls ``calculate`` after each attempt that did not end the
    polling. Implementations must be pure and return a non-negative
    delay.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Return the delay in seconds before the next polling attempt.

        Args:
            attempt: The number of attempts already made (1-indexed), so
                ``calculate(1)`` is the wait after the first poll.
        """


class CappedBackoff(BaseBackoffStrategy):
    """Backoff growing from ``base_delay`` and optionally capped at
    ``max_delay``.

    Subclasses implement ``_grow`` to scale ``base_delay`` with the
    attempt count.

    Args:
        base_delay: The scale of the delays in seconds.
        max_delay: Optional upper bound of any delay in seconds.

    Raises:
        ValueError: If ``base_delay`` is negative or ``max_delay`` is not
            positive.
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"max_delay={self.max_delay})"
        )

    @abstractmethod
    def _grow(self, attempt: int) -> float:
        """Return the multiplier of ``base_delay`` for a 1-based attempt."""

    def calculate(self, attempt: int) -> float:
        delay = self.base_delay * self._grow(max(attempt, 1))
        if self.max_delay is None:
            return delay
        return min(delay, self.max_delay)
