r"""Acceptors: predicates over polling outcomes paired with a target state.

A waiter evaluates its acceptors in insertion order and transitions to
the state of the first acceptor that matches the outcome of a polling
attempt. Value acceptors only look at returned values and exception
acceptors only look at raised exceptions.

Example:
    ```pycon
    >>> from awaiter.acceptor import error_on_value, success_on_value
    >>> from awaiter.outcome import Outcome
    >>> done = success_on_value(lambda value: value == "done")
    >>> done.matches(Outcome.of_value("done"))
    True
    >>> done.matches(Outcome.of_exception(RuntimeError("done")))
    False

    ```
"""

from __future__ import annotations

__all__ = [
    "AcceptorKind",
    "WaiterAcceptor",
    "error_on_exception",
    "error_on_value",
    "retry_on_exception",
    "retry_on_value",
    "success_on_exception",
    "success_on_value",
]

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from awaiter.state import WaiterState

if TYPE_CHECKING:
    from collections.abc import Callable

    from awaiter.outcome import Outcome

    ExceptionMatcher = (
        Callable[[BaseException], bool] | type[BaseException] | tuple[type[BaseException], ...]
    )


class AcceptorKind(Enum):
    """Which variant of an outcome an acceptor examines."""

    VALUE = "value"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class WaiterAcceptor:
    """Predicate over one variant of an outcome, paired with a target state.

    Attributes:
        state: The state the waiter transitions to when the acceptor matches.
        matcher: Predicate called with the value or the exception.
        kind: Which outcome variant the matcher is applied to.
    """

    state: WaiterState
    matcher: Callable[[Any], bool]
    kind: AcceptorKind = AcceptorKind.VALUE

    def matches(self, outcome: Outcome) -> bool:
        """Check whether the acceptor matches a polling outcome.

        Args:
            outcome: The outcome of a polling attempt.

        Returns:
            ``True`` if the outcome variant is the one this acceptor
            examines and the matcher accepts its payload.
        """
        if outcome.is_failure:
            if self.kind is not AcceptorKind.EXCEPTION:
                return False
            return bool(self.matcher(outcome.exception))
        if self.kind is not AcceptorKind.VALUE:
            return False
        return bool(self.matcher(outcome.value))


def _exception_predicate(matcher: ExceptionMatcher) -> Callable[[BaseException], bool]:
    if isinstance(matcher, type) or isinstance(matcher, tuple):
        exc_types = matcher
        return lambda exc: isinstance(exc, exc_types)
    return matcher


def success_on_value(predicate: Callable[[Any], bool]) -> WaiterAcceptor:
    """Create an acceptor that transitions to SUCCESS when ``predicate``
    accepts the returned value."""
    return WaiterAcceptor(WaiterState.SUCCESS, predicate, AcceptorKind.VALUE)


def retry_on_value(predicate: Callable[[Any], bool]) -> WaiterAcceptor:
    """Create an acceptor that transitions to RETRY when ``predicate``
    accepts the returned value."""
    return WaiterAcceptor(WaiterState.RETRY, predicate, AcceptorKind.VALUE)


def error_on_value(predicate: Callable[[Any], bool]) -> WaiterAcceptor:
    """Create an acceptor that transitions to FAILURE when ``predicate``
    accepts the returned value."""
    return WaiterAcceptor(WaiterState.FAILURE, predicate, AcceptorKind.VALUE)


def success_on_exception(matcher: ExceptionMatcher) -> WaiterAcceptor:
    """Create an acceptor that transitions to SUCCESS on a matching exception.

    Args:
        matcher: A predicate over the raised exception, or an exception
            class (or tuple of classes) checked with ``isinstance``.

    Returns:
        The acceptor.

    Example:
        ```pycon
        >>> from awaiter.acceptor import success_on_exception
        >>> from awaiter.outcome import Outcome
        >>> acceptor = success_on_exception(KeyError)
        >>> acceptor.matches(Outcome.of_exception(KeyError("table")))
        True

        ```
    """
    return WaiterAcceptor(
        WaiterState.SUCCESS, _exception_predicate(matcher), AcceptorKind.EXCEPTION
    )


def retry_on_exception(matcher: ExceptionMatcher) -> WaiterAcceptor:
    """Create an acceptor that transitions to RETRY on a matching exception.

    Args:
        matcher: A predicate over the raised exception, or an exception
            class (or tuple of classes) checked with ``isinstance``.

    Returns:
        The acceptor.
    """
    return WaiterAcceptor(WaiterState.RETRY, _exception_predicate(matcher), AcceptorKind.EXCEPTION)


def error_on_exception(matcher: ExceptionMatcher) -> WaiterAcceptor:
    """Create an acceptor that transitions to FAILURE on a matching exception.

    Args:
        matcher: A predicate over the raised exception, or an exception
            class (or tuple of classes) checked with ``isinstance``.

    Returns:
        The acceptor.
    """
    return WaiterAcceptor(
        WaiterState.FAILURE, _exception_predicate(matcher), AcceptorKind.EXCEPTION
    )
