r"""Constant backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from awaiter.backoff.base import BaseBackoffStrategy


class ConstantBackoff(BaseBackoffStrategy):
    """Waits the same ``delay`` between every two polls.

    A delay of 0 polls again as soon as possible.

    Example:
        ```pycon
        >>> from awaiter.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff(delay=2.5)
        >>> backoff.calculate(1), backoff.calculate(10)
        (2.5, 2.5)

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
