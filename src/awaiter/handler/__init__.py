r"""Waiter execution engine.

This package drives polling operations against a list of acceptors. A
single decision engine and a single transition function are shared by
the blocking and the asyncio executors, so both modes make exactly the
same decisions.

Public API:
    - CallbackConfig: Configuration for lifecycle callbacks
    - CallbackManager: Manager for callback invocations
    - AcceptorDecider: Decision engine over the ordered acceptors
    - WaiterExecutor: Synchronous (blocking) executor
    - AsyncWaiterExecutor: Asynchronous (scheduler-driven) executor
"""

from __future__ import annotations

__all__ = [
    "AcceptorDecider",
    "AsyncWaiterExecutor",
    "CallbackConfig",
    "CallbackManager",
    "WaiterExecutor",
]

from awaiter.handler.config import CallbackConfig
from awaiter.handler.decider import AcceptorDecider
from awaiter.handler.executor import WaiterExecutor
from awaiter.handler.executor_async import AsyncWaiterExecutor
from awaiter.handler.manager import CallbackManager
