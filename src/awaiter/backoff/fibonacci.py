r"""Fibonacci backoff strategy."""

from __future__ import annotations

__all__ = ["FibonacciBackoff"]

from awaiter.backoff.base import CappedBackoff


class FibonacciBackoff(CappedBackoff):
    """Scales ``base_delay`` by the Fibonacci sequence 1, 1, 2, 3, 5, ...

    It grows slower than ``ExponentialBackoff``, which suits resources
    that usually settle after a few polls.

    Example:
        ```pycon
        >>> from awaiter.backoff import FibonacciBackoff
        >>> backoff = FibonacciBackoff(base_delay=1.0)
        >>> [backoff.calculate(attempt) for attempt in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]
        >>> FibonacciBackoff(base_delay=1.0, max_delay=10.0).calculate(11)
        10.0

        ```
    """

    @staticmethod
    def _fibonacci(n: int) -> int:
        """Return the nth Fibonacci number, with fib(1) = fib(2) = 1."""
        previous, current = 0, 1
        for _ in range(max(n, 0) - 1):
            previous, current = current, previous + current
        return current if n > 0 else 0

    def _grow(self, attempt: int) -> float:
        return self._fibonacci(attempt)
