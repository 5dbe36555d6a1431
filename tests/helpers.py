r"""Shared test helpers for waiter tests.

This module contains polling operations that replay a scripted
sequence of outcomes, and a scheduler that records requested delays.
"""

from __future__ import annotations

__all__ = [
    "RecordingScheduler",
    "ScriptedOperation",
    "async_operation",
    "sync_operation",
]

import asyncio
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class ScriptedOperation:
    """Polling operation replaying a list of values and exceptions.

    An item that is an exception instance is raised, any other item is
    returned. The last item is repeated once the script is exhausted.

    Args:
        script: The outcomes to replay, in order.
    """

    def __init__(self, script: Iterable[Any]) -> None:
        self.script = list(script)
        self.call_count = 0

    def next_outcome(self) -> Any:
        index = min(self.call_count, len(self.script) - 1)
        self.call_count += 1
        item = self.script[index]
        if isinstance(item, BaseException):
            raise item
        return item


def sync_operation(script: Iterable[Any]) -> tuple[Callable[[], Any], ScriptedOperation]:
    """Create a blocking polling operation from a script."""
    scripted = ScriptedOperation(script)
    return scripted.next_outcome, scripted


def async_operation(script: Iterable[Any]) -> tuple[Callable[[], Any], ScriptedOperation]:
    """Create an async polling operation from a script."""
    scripted = ScriptedOperation(script)

    async def operation() -> Any:
        await asyncio.sleep(0)
        return scripted.next_outcome()

    return operation, scripted


class RecordingScheduler:
    """Scheduler recording requested delays and firing callbacks on the
    next event loop iteration, whatever the delay."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self.handles: list[asyncio.Handle] = []

    def schedule(self, callback: Callable[[], None], delay: float) -> asyncio.Handle:
        self.delays.append(delay)
        handle = asyncio.get_running_loop().call_soon(callback)
        self.handles.append(handle)
        return handle
