r"""Waiter facade and builder.

A ``Waiter`` holds an ordered list of acceptors and a polling strategy.
It is immutable once built and creates a fresh executor for every call,
so any number of concurrent ``run``/``run_async`` calls can share it.
"""

from __future__ import annotations

__all__ = ["Waiter", "WaiterBuilder"]

import logging
from typing import TYPE_CHECKING

from awaiter.exceptions import MissingConfigurationError
from awaiter.handler import AsyncWaiterExecutor, WaiterExecutor
from awaiter.polling import PollingStrategy

if TYPE_CHECKING:
    import asyncio
    import threading
    from collections.abc import Awaitable, Callable, Iterable

    from awaiter.acceptor import WaiterAcceptor
    from awaiter.backoff import BaseBackoffStrategy
    from awaiter.handler import CallbackConfig
    from awaiter.response import WaiterResponse
    from awaiter.scheduler import Scheduler

logger: logging.Logger = logging.getLogger(__name__)


class Waiter:
    """Polls an operation until it reaches a desired state.

    Args:
        polling_strategy: Attempt limit and backoff strategy. Required.
        acceptors: Acceptors evaluated in order; the first match decides.
            May be empty, in which case every value is retried and every
            exception is fatal.
        scheduler: Scheduler used by ``run_async`` to defer attempts.
            Defaults to the running event loop.
        callbacks: Optional lifecycle callbacks.

    Raises:
        MissingConfigurationError: If ``polling_strategy`` is ``None``.

    Example:
        ```pycon
        >>> from awaiter import PollingStrategy, Waiter
        >>> from awaiter.acceptor import success_on_value
        >>> from awaiter.backoff import ConstantBackoff
        >>> waiter = Waiter(
        ...     PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(0.0)),
        ...     acceptors=[success_on_value(lambda value: value == "done")],
        ... )
        >>> states = iter(["pending", "pending", "done"])
        >>> response = waiter.run(lambda: next(states))
        >>> response.value, response.attempts_executed
        ('done', 3)

        ```
    """

    def __init__(
        self,
        polling_strategy: PollingStrategy,
        acceptors: Iterable[WaiterAcceptor] = (),
        scheduler: Scheduler | None = None,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        if polling_strategy is None:
            msg = "polling_strategy is required"
            raise MissingConfigurationError(msg)
        self._polling_strategy = polling_strategy
        self._acceptors: tuple[WaiterAcceptor, ...] = tuple(acceptors)
        self._scheduler = scheduler
        self._callbacks = callbacks

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(polling_strategy={self._polling_strategy!r}, "
            f"acceptors={len(self._acceptors)}, scheduler={self._scheduler!r})"
        )

    @property
    def polling_strategy(self) -> PollingStrategy:
        return self._polling_strategy

    @property
    def acceptors(self) -> tuple[WaiterAcceptor, ...]:
        return self._acceptors

    @property
    def scheduler(self) -> Scheduler | None:
        return self._scheduler

    @property
    def callbacks(self) -> CallbackConfig | None:
        return self._callbacks

    @staticmethod
    def builder() -> WaiterBuilder:
        """Return a new builder."""
        return WaiterBuilder()

    def run(
        self,
        operation: Callable[[], object],
        cancel_event: threading.Event | None = None,
    ) -> WaiterResponse:
        """Poll ``operation`` on the calling thread until a terminal state.

        Args:
            operation: Zero-argument polling operation.
            cancel_event: Optional event stopping the wait between attempts.

        Returns:
            The response of the attempt that matched a success acceptor.

        Raises:
            AcceptorFailureError: If an acceptor matched with the failure state.
            UnmatchedFailureError: If the operation raised an exception that
                matched no acceptor.
            RetriesExhaustedError: If the maximum number of attempts is reached.
            WaiterInterruptedError: If ``cancel_event`` was set while waiting.
        """
        executor = WaiterExecutor(self._polling_strategy, self._acceptors, self._callbacks)
        return executor.execute(operation, cancel_event=cancel_event)

    def run_async(
        self, operation: Callable[[], Awaitable[object]]
    ) -> asyncio.Future[WaiterResponse]:
        """Start polling ``operation`` and return the result future.

        Must be called while an event loop is running. The call returns
        immediately; attempts run through the scheduler. Cancel the
        returned future to stop polling.

        Args:
            operation: Zero-argument callable returning an awaitable.

        Returns:
            A future resolving to the waiter response.
        """
        executor = AsyncWaiterExecutor(
            self._polling_strategy, self._acceptors, self._scheduler, self._callbacks
        )
        return executor.execute(operation)


class WaiterBuilder:
    """Builder for ``Waiter``.

    Example:
        ```pycon
        >>> from awaiter import Waiter
        >>> from awaiter.acceptor import error_on_value, success_on_value
        >>> from awaiter.backoff import ExponentialBackoff
        >>> waiter = (
        ...     Waiter.builder()
        ...     .add_acceptor(error_on_value(lambda value: value == "failed"))
        ...     .add_acceptor(success_on_value(lambda value: value == "ready"))
        ...     .polling_strategy(max_attempts=10, backoff_strategy=ExponentialBackoff())
        ...     .build()
        ... )
        >>> len(waiter.acceptors)
        2

        ```
    """

    def __init__(self) -> None:
        self._acceptors: list[WaiterAcceptor] = []
        self._polling_strategy: PollingStrategy | None = None
        self._scheduler: Scheduler | None = None
        self._callbacks: CallbackConfig | None = None

    def acceptors(self, acceptors: Iterable[WaiterAcceptor]) -> WaiterBuilder:
        """Replace all configured acceptors."""
        self._acceptors = list(acceptors)
        return self

    def add_acceptor(self, acceptor: WaiterAcceptor) -> WaiterBuilder:
        """Append an acceptor to the end of the ordered acceptor list."""
        self._acceptors.append(acceptor)
        return self

    def polling_strategy(
        self,
        polling_strategy: PollingStrategy | None = None,
        *,
        max_attempts: int | None = None,
        backoff_strategy: BaseBackoffStrategy | None = None,
    ) -> WaiterBuilder:
        """Set the polling strategy.

        Either pass a ``PollingStrategy`` or its fields as keyword
        arguments.

        Raises:
            ValueError: If both a strategy and its fields are passed.
            MissingConfigurationError: If a field is missing.
        """
        if polling_strategy is not None:
            if max_attempts is not None or backoff_strategy is not None:
                msg = "pass either a PollingStrategy or its fields, not both"
                raise ValueError(msg)
            self._polling_strategy = polling_strategy
        else:
            self._polling_strategy = PollingStrategy(
                max_attempts=max_attempts, backoff_strategy=backoff_strategy
            )
        return self

    def scheduler(self, scheduler: Scheduler) -> WaiterBuilder:
        """Set the scheduler used by ``run_async``."""
        self._scheduler = scheduler
        return self

    def callbacks(self, callbacks: CallbackConfig) -> WaiterBuilder:
        """Set the lifecycle callbacks."""
        self._callbacks = callbacks
        return self

    def build(self) -> Waiter:
        """Build the waiter.

        Raises:
            MissingConfigurationError: If no polling strategy was set.
        """
        if self._polling_strategy is None:
            msg = "a polling strategy is required to build a waiter"
            raise MissingConfigurationError(msg)
        return Waiter(
            self._polling_strategy,
            acceptors=self._acceptors,
            scheduler=self._scheduler,
            callbacks=self._callbacks,
        )
