r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from awaiter.backoff.base import CappedBackoff


class ExponentialBackoff(CappedBackoff):
    """Doubles the wait after every unsuccessful poll.

    The delay after attempt ``n`` is ``base_delay * 2 ** (n - 1)``.

    Example:
        ```pycon
        >>> from awaiter.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.5)
        >>> [backoff.calculate(attempt) for attempt in (1, 2, 3)]
        [0.5, 1.0, 2.0]
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(self, base_delay: float = 0.3, max_delay: float | None = None) -> None:
        super().__init__(base_delay=base_delay, max_delay=max_delay)

    def _grow(self, attempt: int) -> float:
        return 2 ** (attempt - 1)
