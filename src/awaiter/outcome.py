r"""Outcome of a single polling attempt."""

from __future__ import annotations

__all__ = ["Outcome"]

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Outcome:
    """Tagged result of one polling attempt.

    An outcome is either a value or an exception. A ``None`` value with
    no exception is a valid value outcome.

    Attributes:
        value: The value returned by the polling operation.
        exception: The exception raised by the polling operation.

    Example:
        ```pycon
        >>> from awaiter.outcome import Outcome
        >>> Outcome.of_value("pending").is_failure
        False
        >>> Outcome.of_exception(RuntimeError("boom")).is_failure
        True

        ```
    """

    value: Any = None
    exception: BaseException | None = None

    def __post_init__(self) -> None:
        if self.value is not None and self.exception is not None:
            msg = "an outcome cannot hold both a value and an exception"
            raise ValueError(msg)

    @property
    def is_failure(self) -> bool:
        """Whether the polling operation raised instead of returning."""
        return self.exception is not None

    @classmethod
    def of_value(cls, value: Any) -> Outcome:
        return cls(value=value)

    @classmethod
    def of_exception(cls, exception: BaseException) -> Outcome:
        return cls(exception=exception)
