r"""Backoff strategies computing the delay between two polling attempts.

This package provides constant, exponential, linear and Fibonacci
backoff patterns. A strategy receives the 1-based number of attempts
already made and returns a delay in seconds.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "CappedBackoff",
    "ConstantBackoff",
    "ExponentialBackoff",
    "FibonacciBackoff",
    "LinearBackoff",
]

from awaiter.backoff.base import BaseBackoffStrategy, CappedBackoff
from awaiter.backoff.constant import ConstantBackoff
from awaiter.backoff.exponential import ExponentialBackoff
from awaiter.backoff.fibonacci import FibonacciBackoff
from awaiter.backoff.linear import LinearBackoff
