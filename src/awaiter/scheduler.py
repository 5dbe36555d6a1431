r"""Schedulers running a callback after a delay.

The asynchronous executor never sleeps: it hands the next attempt to a
scheduler and returns control to the event loop. A scheduler is shared
between many waiter executions and must not assume exclusive use.
"""

from __future__ import annotations

__all__ = ["Cancellable", "EventLoopScheduler", "Scheduler"]

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    """Handle of a scheduled callback."""

    def cancel(self) -> None:
        """Cancel the callback if it has not run yet."""


class Scheduler(Protocol):
    """Service running a callback after at least ``delay`` seconds."""

    def schedule(self, callback: Callable[[], None], delay: float) -> Cancellable:
        """Schedule ``callback`` to run after ``delay`` seconds.

        Args:
            callback: The zero-argument callback to run.
            delay: The delay in seconds. Must be non-negative.

        Returns:
            A handle that can cancel the callback.
        """


class EventLoopScheduler:
    """Scheduler backed by ``asyncio`` event loop timers.

    Args:
        loop: The event loop to schedule on. If ``None``, the loop running
            when ``schedule`` is called is used.

    Example:
        ```pycon
        >>> import asyncio
        >>> from awaiter.scheduler import EventLoopScheduler
        >>> async def main() -> list[str]:
        ...     fired = []
        ...     scheduler = EventLoopScheduler()
        ...     scheduler.schedule(lambda: fired.append("tick"), 0.01)
        ...     await asyncio.sleep(0.05)
        ...     return fired
        ...
        >>> asyncio.run(main())
        ['tick']

        ```
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(loop={self._loop!r})"

    def schedule(self, callback: Callable[[], None], delay: float) -> asyncio.TimerHandle:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        logger.debug(f"Scheduling callback in {delay:.2f}s")
        return loop.call_later(delay, callback)
