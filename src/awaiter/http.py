r"""Acceptors for polling HTTP endpoints with httpx.

These helpers build acceptors over ``httpx.Response`` values and httpx
exceptions, for waiters whose polling operation is an HTTP request.

Example:
    ```pycon
    >>> import httpx
    >>> from awaiter import Waiter
    >>> from awaiter.backoff import ExponentialBackoff
    >>> from awaiter.http import retry_on_transport_error, success_on_status
    >>> waiter = (
    ...     Waiter.builder()
    ...     .add_acceptor(success_on_status(200))
    ...     .add_acceptor(retry_on_transport_error())
    ...     .polling_strategy(max_attempts=5, backoff_strategy=ExponentialBackoff())
    ...     .build()
    ... )
    >>> with httpx.Client() as client:  # doctest: +SKIP
    ...     waiter.run(lambda: client.get("https://api.example.com/jobs/42"))
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "error_on_status",
    "retry_on_status",
    "retry_on_status_error",
    "retry_on_transport_error",
    "success_on_status",
]

from typing import TYPE_CHECKING

import httpx

from awaiter.acceptor import (
    error_on_value,
    retry_on_exception,
    retry_on_value,
    success_on_value,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from awaiter.acceptor import WaiterAcceptor


def _status_in(status_codes: tuple[int, ...]) -> Callable[[object], bool]:
    if not status_codes:
        msg = "at least one status code is required"
        raise ValueError(msg)

    def predicate(response: object) -> bool:
        return isinstance(response, httpx.Response) and response.status_code in status_codes

    return predicate


def success_on_status(*status_codes: int) -> WaiterAcceptor:
    """Succeed when the response has one of ``status_codes``.

    Example:
        ```pycon
        >>> import httpx
        >>> from awaiter.http import success_on_status
        >>> from awaiter.outcome import Outcome
        >>> acceptor = success_on_status(200, 204)
        >>> acceptor.matches(Outcome.of_value(httpx.Response(204)))
        True
        >>> acceptor.matches(Outcome.of_value(httpx.Response(404)))
        False

        ```
    """
    return success_on_value(_status_in(status_codes))


def retry_on_status(*status_codes: int) -> WaiterAcceptor:
    """Retry when the response has one of ``status_codes``."""
    return retry_on_value(_status_in(status_codes))


def error_on_status(*status_codes: int) -> WaiterAcceptor:
    """Fail when the response has one of ``status_codes``."""
    return error_on_value(_status_in(status_codes))


def retry_on_transport_error() -> WaiterAcceptor:
    """Retry when the request failed at the transport level (timeouts,
    connection errors, ...)."""
    return retry_on_exception(httpx.TransportError)


def retry_on_status_error(*status_codes: int) -> WaiterAcceptor:
    """Retry on ``httpx.HTTPStatusError`` raised by ``raise_for_status()``.

    Args:
        *status_codes: Status codes to retry. If empty, every status error
            is retried.

    Returns:
        The acceptor.
    """

    def predicate(exc: BaseException) -> bool:
        if not isinstance(exc, httpx.HTTPStatusError):
            return False
        return not status_codes or exc.response.status_code in status_codes

    return retry_on_exception(predicate)
