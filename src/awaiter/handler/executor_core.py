r"""Shared core logic for waiter executors.

Both the synchronous and the asynchronous executor turn the outcome of
an attempt into a ``Transition`` with ``evaluate_outcome``. The executors
only differ in how they act on it: return or raise, or complete a future;
sleep or schedule.
"""

from __future__ import annotations

__all__ = ["Transition", "compute_next_delay", "create_waiter_response", "evaluate_outcome"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from awaiter.exceptions import (
    AcceptorFailureError,
    RetriesExhaustedError,
    UnmatchedFailureError,
    WaiterError,
)
from awaiter.response import WaiterResponse, create_waiter_response
from awaiter.state import WaiterState

if TYPE_CHECKING:
    from awaiter.backoff import BaseBackoffStrategy
    from awaiter.handler.decider import AcceptorDecider
    from awaiter.outcome import Outcome
    from awaiter.polling import PollingStrategy

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    """What an executor does after evaluating one attempt.

    Exactly one attribute is set.

    Attributes:
        response: Terminal success with this response.
        error: Terminal failure with this error.
        delay: Wait this many seconds, then run the next attempt.
    """

    response: WaiterResponse | None = None
    error: WaiterError | None = None
    delay: float | None = None

    @property
    def is_terminal(self) -> bool:
        return self.delay is None


def compute_next_delay(attempt: int, backoff_strategy: BaseBackoffStrategy) -> float:
    """Compute the delay before the next attempt.

    Args:
        attempt: Number of attempts already made (1-indexed).
        backoff_strategy: The backoff strategy of the polling strategy.

    Returns:
        The delay in seconds.

    Raises:
        ValueError: If the backoff strategy returns a negative delay.

    Example:
        ```pycon
        >>> from awaiter.backoff import LinearBackoff
        >>> from awaiter.handler.executor_core import compute_next_delay
        >>> compute_next_delay(2, LinearBackoff(base_delay=0.5))
        1.0

        ```
    """
    delay = backoff_strategy.calculate(attempt)
    if delay < 0:
        msg = f"backoff strategy returned a negative delay: {delay}"
        raise ValueError(msg)
    return delay


def _with_cause(error: WaiterError, outcome: Outcome) -> WaiterError:
    if outcome.exception is not None:
        error.__cause__ = outcome.exception
    return error


def _maybe_retry(outcome: Outcome, attempt: int, polling_strategy: PollingStrategy) -> Transition:
    max_attempts = polling_strategy.max_attempts
    if attempt >= max_attempts:
        logger.debug(f"Waiter exhausted its {max_attempts} attempts")
        error = RetriesExhaustedError(
            f"Waiter has exceeded max retry attempts: {max_attempts}",
            max_attempts=max_attempts,
            attempts=attempt,
        )
        return Transition(error=_with_cause(error, outcome))
    delay = compute_next_delay(attempt, polling_strategy.backoff_strategy)
    logger.debug(f"Attempt {attempt}/{max_attempts} not accepted, retrying in {delay:.2f}s")
    return Transition(delay=delay)


def evaluate_outcome(
    outcome: Outcome,
    attempt: int,
    decider: AcceptorDecider,
    polling_strategy: PollingStrategy,
) -> Transition:
    """Turn the outcome of an attempt into the executor's next step.

    Unmatched values are retried while unmatched exceptions are fatal
    and do not consume a retry.

    Args:
        outcome: The outcome of the attempt.
        attempt: Number of attempts made so far, including this one.
        decider: The decision engine.
        polling_strategy: The attempt limit and backoff strategy.

    Returns:
        The transition to apply.
    """
    state = decider.decide(outcome)

    if state is WaiterState.SUCCESS:
        return Transition(response=create_waiter_response(outcome, attempts_executed=attempt))
    if state is WaiterState.FAILURE:
        error = AcceptorFailureError(
            "A waiter acceptor was matched and transitioned the waiter to failure state",
            attempts=attempt,
        )
        return Transition(error=_with_cause(error, outcome))
    if state is WaiterState.RETRY:
        return _maybe_retry(outcome, attempt, polling_strategy)

    if outcome.is_failure:
        error = UnmatchedFailureError(
            f"An exception was thrown and did not match any waiter acceptor: {outcome.exception!r}",
            attempts=attempt,
        )
        return Transition(error=_with_cause(error, outcome))
    # default to retry when no acceptor matched the value
    return _maybe_retry(outcome, attempt, polling_strategy)
