r"""Waiter states produced by acceptor evaluation."""

from __future__ import annotations

__all__ = ["WaiterState"]

from enum import Enum


class WaiterState(Enum):
    """States a matched acceptor can transition the waiter to.

    "No acceptor matched" is not a state: the decision engine reports it
    as ``None``.

    Attributes:
        SUCCESS: The resource reached the desired state.
        RETRY: The resource is not ready yet, poll again.
        FAILURE: The resource will never reach the desired state.
    """

    SUCCESS = "success"
    RETRY = "retry"
    FAILURE = "failure"
