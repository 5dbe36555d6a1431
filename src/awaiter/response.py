r"""Response returned by a waiter that reached its success state."""

from __future__ import annotations

__all__ = ["WaiterResponse", "create_waiter_response"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from awaiter.outcome import Outcome


@dataclass(frozen=True)
class WaiterResponse:
    """Outcome that transitioned the waiter to the success state.

    Exactly one of ``value`` and ``exception`` describes the matched
    outcome: a success acceptor may match either a returned value or a
    raised exception.

    Attributes:
        value: The matched value, when a value acceptor succeeded.
        exception: The matched exception, when an exception acceptor
            succeeded.
        attempts_executed: Number of polling attempts made (1-indexed).

    Example:
        ```pycon
        >>> from awaiter.response import WaiterResponse
        >>> response = WaiterResponse(value="done", attempts_executed=3)
        >>> response.value
        'done'
        >>> response.has_exception
        False

        ```
    """

    value: Any = None
    exception: BaseException | None = None
    attempts_executed: int = 1

    def __post_init__(self) -> None:
        if self.value is not None and self.exception is not None:
            msg = "a waiter response cannot hold both a value and an exception"
            raise ValueError(msg)
        if self.attempts_executed < 1:
            msg = f"attempts_executed must be >= 1, got {self.attempts_executed}"
            raise ValueError(msg)

    @property
    def has_exception(self) -> bool:
        """Whether the success state was reached by a matched exception."""
        return self.exception is not None


def create_waiter_response(outcome: Outcome, attempts_executed: int) -> WaiterResponse:
    """Create a ``WaiterResponse`` from the outcome that matched success.

    Args:
        outcome: The outcome of the attempt that matched a success acceptor.
        attempts_executed: Number of polling attempts made so far.

    Returns:
        The waiter response.

    Example:
        ```pycon
        >>> from awaiter.outcome import Outcome
        >>> from awaiter.response import create_waiter_response
        >>> create_waiter_response(Outcome.of_value("done"), attempts_executed=2)
        WaiterResponse(value='done', exception=None, attempts_executed=2)

        ```
    """
    if outcome.is_failure:
        return WaiterResponse(exception=outcome.exception, attempts_executed=attempts_executed)
    return WaiterResponse(value=outcome.value, attempts_executed=attempts_executed)
