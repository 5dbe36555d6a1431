r"""Synchronous waiter executor.

This module provides the WaiterExecutor class that drives a blocking
polling operation on the calling thread until an acceptor decides the
waiter is done.
"""

from __future__ import annotations

__all__ = ["WaiterExecutor"]

import logging
import time
from typing import TYPE_CHECKING, NoReturn

from awaiter.exceptions import WaiterError, WaiterInterruptedError
from awaiter.handler.decider import AcceptorDecider
from awaiter.handler.executor_core import evaluate_outcome
from awaiter.handler.manager import CallbackManager
from awaiter.outcome import Outcome

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable, Iterable

    from awaiter.acceptor import WaiterAcceptor
    from awaiter.handler.config import CallbackConfig
    from awaiter.polling import PollingStrategy
    from awaiter.response import WaiterResponse

logger: logging.Logger = logging.getLogger(__name__)


class WaiterExecutor:
    """Executes a polling operation until the waiter reaches a terminal
    state, blocking the calling thread between attempts.

    The executor holds configuration only. Each call to ``execute`` owns
    its own attempt counter, so one executor may serve concurrent calls.

    Attributes:
        polling_strategy: Attempt limit and backoff strategy.
        decider: Decision engine over the acceptors.
        callbacks: Manager for invoking callbacks.

    Example:
        ```pycon
        >>> from awaiter.acceptor import success_on_value
        >>> from awaiter.backoff import ConstantBackoff
        >>> from awaiter.handler import WaiterExecutor
        >>> from awaiter.polling import PollingStrategy
        >>> executor = WaiterExecutor(
        ...     PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(0.0)),
        ...     [success_on_value(lambda value: value == "done")],
        ... )
        >>> states = iter(["pending", "pending", "done"])
        >>> response = executor.execute(lambda: next(states))
        >>> response.value, response.attempts_executed
        ('done', 3)

        ```
    """

    def __init__(
        self,
        polling_strategy: PollingStrategy,
        acceptors: Iterable[WaiterAcceptor],
        callbacks: CallbackConfig | None = None,
    ) -> None:
        self.polling_strategy = polling_strategy
        self.decider: AcceptorDecider = AcceptorDecider(acceptors)
        self.callbacks: CallbackManager = CallbackManager(
            callbacks, polling_strategy.max_attempts
        )

    def execute(
        self,
        operation: Callable[[], object],
        cancel_event: threading.Event | None = None,
    ) -> WaiterResponse:
        """Run ``operation`` until an acceptor decides the waiter is done.

        Any ``Exception`` raised by the operation is evaluated against the
        acceptors instead of being propagated. ``KeyboardInterrupt`` and
        other ``BaseException``s propagate unchanged.

        Args:
            operation: Zero-argument polling operation.
            cancel_event: Optional event. When it is set, the wait between
                two attempts stops and the waiter fails. The event is
                left set.

        Returns:
            The response of the attempt that matched a success acceptor.

        Raises:
            AcceptorFailureError: If an acceptor matched with the failure state.
            UnmatchedFailureError: If the operation raised an exception that
                matched no acceptor.
            RetriesExhaustedError: If the maximum number of attempts is reached.
            WaiterInterruptedError: If ``cancel_event`` was set while waiting.
        """
        start_time = time.time()
        attempt = 0

        while True:
            attempt += 1
            self.callbacks.on_attempt(attempt)
            logger.debug(f"Executing attempt {attempt}/{self.polling_strategy.max_attempts}")
            try:
                outcome = Outcome.of_value(operation())
            except Exception as exc:  # noqa: BLE001
                outcome = Outcome.of_exception(exc)

            transition = evaluate_outcome(outcome, attempt, self.decider, self.polling_strategy)

            if transition.response is not None:
                self.callbacks.on_success(attempt, transition.response, start_time)
                return transition.response
            if transition.error is not None:
                self._fail(transition.error, attempt, start_time)

            self.callbacks.on_retry(attempt, transition.delay, outcome.value, outcome.exception)
            self._wait(transition.delay, cancel_event, attempt, start_time)

    def _wait(
        self,
        delay: float,
        cancel_event: threading.Event | None,
        attempt: int,
        start_time: float,
    ) -> None:
        if cancel_event is None:
            time.sleep(delay)
            return
        if cancel_event.is_set() or cancel_event.wait(delay):
            self._fail(
                WaiterInterruptedError(
                    f"The waiter was interrupted after {attempt} attempts", attempts=attempt
                ),
                attempt,
                start_time,
            )

    def _fail(self, error: WaiterError, attempt: int, start_time: float) -> NoReturn:
        logger.debug(f"Waiter failed after {attempt} attempts: {error}")
        self.callbacks.on_failure(attempt, error, start_time)
        raise error
