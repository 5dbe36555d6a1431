r"""awaiter - wait until a remote resource reaches a desired state.

This package replaces ad-hoc sleep/retry loops with waiters. A waiter
repeatedly invokes a caller-supplied polling operation, evaluates every
outcome against an ordered list of acceptors and decides whether to
succeed, fail, or wait and poll again.

Key Features:
    - Ordered acceptors over returned values and raised exceptions,
      first match wins
    - Blocking execution (``Waiter.run``) and non-blocking asyncio
      execution (``Waiter.run_async``) with identical decisions
    - Backoff strategies: Constant, Exponential, Linear, Fibonacci
    - Lifecycle callbacks for logging, metrics and alerting
    - httpx acceptor helpers for polling HTTP endpoints

Example:
    ```pycon
    >>> from awaiter import Waiter
    >>> from awaiter.acceptor import error_on_value, success_on_value
    >>> from awaiter.backoff import ConstantBackoff
    >>> waiter = (
    ...     Waiter.builder()
    ...     .add_acceptor(error_on_value(lambda state: state == "FAILED"))
    ...     .add_acceptor(success_on_value(lambda state: state == "ACTIVE"))
    ...     .polling_strategy(max_attempts=5, backoff_strategy=ConstantBackoff(0.0))
    ...     .build()
    ... )
    >>> states = iter(["CREATING", "CREATING", "ACTIVE"])
    >>> waiter.run(lambda: next(states)).attempts_executed
    3

    ```
"""

from __future__ import annotations

__all__ = [
    "AcceptorFailureError",
    "MissingConfigurationError",
    "PollingStrategy",
    "RetriesExhaustedError",
    "UnmatchedFailureError",
    "Waiter",
    "WaiterAcceptor",
    "WaiterBuilder",
    "WaiterError",
    "WaiterInterruptedError",
    "WaiterResponse",
    "WaiterState",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from awaiter.acceptor import WaiterAcceptor
from awaiter.exceptions import (
    AcceptorFailureError,
    MissingConfigurationError,
    RetriesExhaustedError,
    UnmatchedFailureError,
    WaiterError,
    WaiterInterruptedError,
)
from awaiter.polling import PollingStrategy
from awaiter.response import WaiterResponse
from awaiter.state import WaiterState
from awaiter.waiter import Waiter, WaiterBuilder

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
