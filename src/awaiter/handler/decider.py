r"""Decision engine mapping a polling outcome to the next waiter state.

This module provides the AcceptorDecider class. It scans the acceptors
in insertion order and returns the state of the first one that matches
the outcome. The first match wins even if a later acceptor matches too.
"""

from __future__ import annotations

__all__ = ["AcceptorDecider"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from awaiter.acceptor import WaiterAcceptor
    from awaiter.outcome import Outcome
    from awaiter.state import WaiterState

logger: logging.Logger = logging.getLogger(__name__)


class AcceptorDecider:
    """Decides the next waiter state of a polling outcome.

    The decider holds no mutable state and can be shared between
    executors and threads.

    Args:
        acceptors: The acceptors, in evaluation order.

    Example:
        ```pycon
        >>> from awaiter.acceptor import error_on_value, success_on_value
        >>> from awaiter.handler import AcceptorDecider
        >>> from awaiter.outcome import Outcome
        >>> decider = AcceptorDecider(
        ...     [error_on_value(lambda v: v == "bad"), success_on_value(lambda v: v != "")]
        ... )
        >>> decider.decide(Outcome.of_value("bad"))
        <WaiterState.FAILURE: 'failure'>
        >>> decider.decide(Outcome.of_value("done"))
        <WaiterState.SUCCESS: 'success'>
        >>> decider.decide(Outcome.of_value("")) is None
        True

        ```
    """

    def __init__(self, acceptors: Iterable[WaiterAcceptor]) -> None:
        self.acceptors: tuple[WaiterAcceptor, ...] = tuple(acceptors)

    def decide(self, outcome: Outcome) -> WaiterState | None:
        """Return the state of the first acceptor matching ``outcome``.

        Args:
            outcome: The outcome of a polling attempt.

        Returns:
            The target state of the first matching acceptor, or ``None``
            if no acceptor matches.
        """
        for acceptor in self.acceptors:
            if acceptor.matches(outcome):
                logger.debug(f"Outcome matched acceptor with state {acceptor.state.name}")
                return acceptor.state
        logger.debug("Outcome did not match any acceptor")
        return None
