r"""Asynchronous waiter executor.

This module provides the AsyncWaiterExecutor class. It drives an async
polling operation without ever blocking: each attempt completes through
a done-callback, and the next attempt is handed to a scheduler instead
of sleeping.
"""

from __future__ import annotations

__all__ = ["AsyncWaiterExecutor"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from awaiter.handler.decider import AcceptorDecider
from awaiter.handler.executor_core import evaluate_outcome
from awaiter.handler.manager import CallbackManager
from awaiter.outcome import Outcome
from awaiter.scheduler import EventLoopScheduler

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from awaiter.acceptor import WaiterAcceptor
    from awaiter.handler.config import CallbackConfig
    from awaiter.polling import PollingStrategy
    from awaiter.response import WaiterResponse
    from awaiter.scheduler import Cancellable, Scheduler

logger: logging.Logger = logging.getLogger(__name__)


class AsyncWaiterExecutor:
    """Executes an async polling operation until the waiter reaches a
    terminal state, without blocking any thread.

    The executor holds configuration only. Each call to ``execute``
    creates its own execution state (attempt counter, result future and
    pending handles).

    Attributes:
        polling_strategy: Attempt limit and backoff strategy.
        decider: Decision engine over the acceptors.
        callbacks: Manager for invoking callbacks.
        scheduler: Scheduler running the next attempt after the backoff
            delay. ``None`` means the running event loop.

    Example:
        ```pycon
        >>> import asyncio
        >>> from awaiter.acceptor import success_on_value
        >>> from awaiter.backoff import ConstantBackoff
        >>> from awaiter.handler import AsyncWaiterExecutor
        >>> from awaiter.polling import PollingStrategy
        >>> async def main() -> tuple[str, int]:
        ...     states = iter(["pending", "done"])
        ...
        ...     async def describe() -> str:
        ...         return next(states)
        ...
        ...     executor = AsyncWaiterExecutor(
        ...         PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(0.0)),
        ...         [success_on_value(lambda value: value == "done")],
        ...     )
        ...     response = await executor.execute(describe)
        ...     return response.value, response.attempts_executed
        ...
        >>> asyncio.run(main())
        ('done', 2)

        ```
    """

    def __init__(
        self,
        polling_strategy: PollingStrategy,
        acceptors: Iterable[WaiterAcceptor],
        scheduler: Scheduler | None = None,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        self.polling_strategy = polling_strategy
        self.decider: AcceptorDecider = AcceptorDecider(acceptors)
        self.callbacks: CallbackManager = CallbackManager(
            callbacks, polling_strategy.max_attempts
        )
        self.scheduler = scheduler

    def execute(
        self, operation: Callable[[], Awaitable[object]]
    ) -> asyncio.Future[WaiterResponse]:
        """Start polling and return the result future immediately.

        Must be called while an event loop is running. The future resolves
        to the response of the attempt that matched a success acceptor, or
        fails with ``AcceptorFailureError``, ``UnmatchedFailureError`` or
        ``RetriesExhaustedError``. Cancelling the future stops polling.

        Args:
            operation: Zero-argument callable returning an awaitable.

        Returns:
            The result future.

        Raises:
            RuntimeError: If no event loop is running.
        """
        loop = asyncio.get_running_loop()
        scheduler = self.scheduler if self.scheduler is not None else EventLoopScheduler(loop)
        return _AsyncExecution(self, operation, scheduler, loop).start()


class _AsyncExecution:
    r"""State of a single asynchronous execution.

    The result future is completed exactly once. Every continuation
    checks it first, so a scheduled attempt firing after cancellation is
    skipped and a late polling result is dropped.
    """

    def __init__(
        self,
        executor: AsyncWaiterExecutor,
        operation: Callable[[], Awaitable[object]],
        scheduler: Scheduler,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self.executor = executor
        self.operation = operation
        self.scheduler = scheduler
        self.loop = loop
        self.attempt = 0
        self.start_time = time.time()
        self.future: asyncio.Future[WaiterResponse] = loop.create_future()
        self._timer: Cancellable | None = None
        self._task: asyncio.Future | None = None

    def start(self) -> asyncio.Future[WaiterResponse]:
        self.future.add_done_callback(self._on_result_done)
        self._run_attempt()
        return self.future

    def _run_attempt(self) -> None:
        self._timer = None
        if self.future.done():
            logger.debug("Skipping scheduled attempt: waiter already completed")
            return

        self.attempt += 1
        try:
            self.executor.callbacks.on_attempt(self.attempt)
        except Exception as exc:  # noqa: BLE001
            self._set_exception(exc)
            return

        logger.debug(
            f"Executing attempt {self.attempt}/{self.executor.polling_strategy.max_attempts}"
        )
        try:
            task = asyncio.ensure_future(self.operation())
        except Exception as exc:  # noqa: BLE001
            self._evaluate(Outcome.of_exception(exc))
            return
        self._task = task
        task.add_done_callback(self._on_attempt_done)

    def _on_attempt_done(self, task: asyncio.Future) -> None:
        self._task = None
        if self.future.done():
            logger.debug(f"Ignoring result of attempt {self.attempt}: waiter already completed")
            return
        if task.cancelled():
            logger.debug(f"Attempt {self.attempt} was cancelled, cancelling the waiter")
            self.future.cancel()
            return

        exc = task.exception()
        if exc is None:
            self._evaluate(Outcome.of_value(task.result()))
        elif isinstance(exc, Exception):
            self._evaluate(Outcome.of_exception(exc))
        else:
            self._set_exception(exc)

    def _evaluate(self, outcome: Outcome) -> None:
        callbacks = self.executor.callbacks
        try:
            transition = evaluate_outcome(
                outcome, self.attempt, self.executor.decider, self.executor.polling_strategy
            )
            if transition.response is not None:
                callbacks.on_success(self.attempt, transition.response, self.start_time)
                self._set_result(transition.response)
            elif transition.error is not None:
                logger.debug(f"Waiter failed after {self.attempt} attempts: {transition.error}")
                callbacks.on_failure(self.attempt, transition.error, self.start_time)
                self._set_exception(transition.error)
            else:
                callbacks.on_retry(
                    self.attempt, transition.delay, outcome.value, outcome.exception
                )
                self._schedule(transition.delay)
        except Exception as exc:  # noqa: BLE001
            self._set_exception(exc)

    def _schedule(self, delay: float) -> None:
        if self.future.done():
            logger.debug("Not scheduling next attempt: waiter already completed")
            return
        self._timer = self.scheduler.schedule(self._fire, delay)

    def _fire(self) -> None:
        # The scheduler may run callbacks outside the loop thread.
        self.loop.call_soon_threadsafe(self._run_attempt)

    def _on_result_done(self, future: asyncio.Future) -> None:
        if not future.cancelled():
            return
        logger.debug(f"Waiter cancelled after {self.attempt} attempts")
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _set_result(self, response: WaiterResponse) -> None:
        if not self.future.done():
            self.future.set_result(response)

    def _set_exception(self, exc: BaseException) -> None:
        if not self.future.done():
            self.future.set_exception(exc)
