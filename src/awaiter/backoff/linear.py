r"""Linear backoff strategy."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from awaiter.backoff.base import CappedBackoff


class LinearBackoff(CappedBackoff):
    """Waits ``base_delay * n`` seconds after attempt ``n``.

    Example:
        ```pycon
        >>> from awaiter.backoff import LinearBackoff
        >>> [LinearBackoff(base_delay=1.0).calculate(attempt) for attempt in (1, 3)]
        [1.0, 3.0]
        >>> LinearBackoff(base_delay=2.0, max_delay=5.0).calculate(6)
        5.0

        ```
    """

    def _grow(self, attempt: int) -> float:
        return attempt
