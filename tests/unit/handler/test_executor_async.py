r"""Unit tests for the asynchronous waiter executor."""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from awaiter import (
    AcceptorFailureError,
    PollingStrategy,
    RetriesExhaustedError,
    UnmatchedFailureError,
)
from awaiter.acceptor import (
    error_on_value,
    retry_on_exception,
    success_on_exception,
    success_on_value,
)
from awaiter.backoff import ConstantBackoff, LinearBackoff
from awaiter.handler import AsyncWaiterExecutor, CallbackConfig
from tests.helpers import RecordingScheduler, async_operation

if TYPE_CHECKING:
    from collections.abc import Callable

DONE = success_on_value(lambda value: value == "done")


class ManualScheduler:
    """Scheduler keeping callbacks until the test fires them."""

    def __init__(self) -> None:
        self.callbacks: list[Callable[[], None]] = []
        self.handles: list[Mock] = []

    def schedule(self, callback: Callable[[], None], delay: float) -> Mock:  # noqa: ARG002
        self.callbacks.append(callback)
        handle = Mock()
        self.handles.append(handle)
        return handle


class ThreadTimerScheduler:
    """Scheduler firing callbacks from a timer thread."""

    def schedule(self, callback: Callable[[], None], delay: float) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.start()
        return timer


def test_async_waiter_executor_creation(polling_strategy: PollingStrategy) -> None:
    executor = AsyncWaiterExecutor(polling_strategy, [DONE])
    assert executor.polling_strategy is polling_strategy
    assert executor.decider.acceptors == (DONE,)
    assert executor.scheduler is None


def test_async_waiter_executor_requires_running_loop(polling_strategy: PollingStrategy) -> None:
    operation, _ = async_operation(["done"])
    with pytest.raises(RuntimeError):
        AsyncWaiterExecutor(polling_strategy, [DONE]).execute(operation)


@pytest.mark.asyncio
async def test_async_waiter_executor_returns_future_immediately(
    polling_strategy: PollingStrategy,
) -> None:
    operation, _ = async_operation(["done"])
    future = AsyncWaiterExecutor(polling_strategy, [DONE]).execute(operation)

    assert isinstance(future, asyncio.Future)
    assert not future.done()
    assert (await future).value == "done"


@pytest.mark.asyncio
async def test_async_waiter_executor_success_first_attempt(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    operation, scripted = async_operation(["done"])
    response = await AsyncWaiterExecutor(polling_strategy, [DONE], scheduler).execute(operation)

    assert response.value == "done"
    assert response.attempts_executed == 1
    assert scripted.call_count == 1
    assert scheduler.delays == []


@pytest.mark.asyncio
async def test_async_waiter_executor_success_after_retries(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    operation, scripted = async_operation(["pending", "pending", "done"])
    response = await AsyncWaiterExecutor(polling_strategy, [DONE], scheduler).execute(operation)

    assert response.value == "done"
    assert response.attempts_executed == 3
    assert scripted.call_count == 3
    assert scheduler.delays == [1.0, 1.0]


@pytest.mark.asyncio
async def test_async_waiter_executor_backoff_receives_attempt_number(
    scheduler: RecordingScheduler,
) -> None:
    strategy = PollingStrategy(max_attempts=4, backoff_strategy=LinearBackoff(base_delay=0.5))
    operation, _ = async_operation(["pending", "pending", "pending", "done"])
    await AsyncWaiterExecutor(strategy, [DONE], scheduler).execute(operation)

    assert scheduler.delays == [0.5, 1.0, 1.5]


@pytest.mark.asyncio
async def test_async_waiter_executor_default_scheduler() -> None:
    strategy = PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(delay=0.01))
    operation, _ = async_operation(["pending", "done"])
    response = await AsyncWaiterExecutor(strategy, [DONE]).execute(operation)

    assert response.attempts_executed == 2


@pytest.mark.asyncio
async def test_async_waiter_executor_retries_exhausted(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    operation, scripted = async_operation(["pending"])
    with pytest.raises(RetriesExhaustedError, match=r"max retry attempts: 3") as exc_info:
        await AsyncWaiterExecutor(polling_strategy, [DONE], scheduler).execute(operation)

    assert exc_info.value.attempts == 3
    assert scripted.call_count == 3
    assert len(scheduler.delays) == 2


@pytest.mark.asyncio
async def test_async_waiter_executor_acceptor_failure(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    operation, scripted = async_operation(["failed", "done"])
    acceptors = [error_on_value(lambda value: value == "failed"), DONE]
    with pytest.raises(AcceptorFailureError) as exc_info:
        await AsyncWaiterExecutor(polling_strategy, acceptors, scheduler).execute(operation)

    assert exc_info.value.attempts == 1
    assert scripted.call_count == 1


@pytest.mark.asyncio
async def test_async_waiter_executor_unmatched_exception_is_fatal(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    exc = ValueError("unexpected")
    operation, scripted = async_operation([exc, "done"])
    with pytest.raises(UnmatchedFailureError) as exc_info:
        await AsyncWaiterExecutor(polling_strategy, [DONE], scheduler).execute(operation)

    assert exc_info.value.__cause__ is exc
    assert scripted.call_count == 1
    assert scheduler.delays == []


@pytest.mark.asyncio
async def test_async_waiter_executor_success_on_exception(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    exc = KeyError("table")
    operation, _ = async_operation([TimeoutError(), exc])
    response = await AsyncWaiterExecutor(
        polling_strategy,
        [retry_on_exception(TimeoutError), success_on_exception(KeyError)],
        scheduler,
    ).execute(operation)

    assert response.exception is exc
    assert response.attempts_executed == 2


@pytest.mark.asyncio
async def test_async_waiter_executor_operation_raises_synchronously(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    """Test that an exception raised before an awaitable is returned is
    evaluated as a failure outcome."""
    calls = []

    def operation():  # noqa: ANN202
        calls.append(1)
        if len(calls) == 1:
            raise TimeoutError

        async def describe() -> str:
            return "done"

        return describe()

    response = await AsyncWaiterExecutor(
        polling_strategy, [retry_on_exception(TimeoutError), DONE], scheduler
    ).execute(operation)

    assert response.attempts_executed == 2
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_async_waiter_executor_operation_not_awaitable(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    with pytest.raises(UnmatchedFailureError) as exc_info:
        await AsyncWaiterExecutor(polling_strategy, [DONE], scheduler).execute(lambda: "done")

    assert isinstance(exc_info.value.__cause__, TypeError)


@pytest.mark.asyncio
async def test_async_waiter_executor_cancel_cancels_pending_attempt() -> None:
    strategy = PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(delay=10.0))
    handles: list[asyncio.TimerHandle] = []

    class TimerScheduler:
        def schedule(self, callback, delay):  # noqa: ANN001, ANN202
            handle = asyncio.get_running_loop().call_later(delay, callback)
            handles.append(handle)
            return handle

    operation, scripted = async_operation(["pending"])
    future = AsyncWaiterExecutor(strategy, [DONE], TimerScheduler()).execute(operation)
    while not handles:
        await asyncio.sleep(0)

    future.cancel()
    await asyncio.sleep(0)

    assert future.cancelled()
    assert handles[0].cancelled()
    assert scripted.call_count == 1


@pytest.mark.asyncio
async def test_async_waiter_executor_skips_attempt_fired_after_cancel(
    polling_strategy: PollingStrategy,
) -> None:
    scheduler = ManualScheduler()
    operation, scripted = async_operation(["pending"])
    future = AsyncWaiterExecutor(polling_strategy, [DONE], scheduler).execute(operation)
    while not scheduler.callbacks:
        await asyncio.sleep(0)

    future.cancel()
    await asyncio.sleep(0)
    scheduler.handles[0].cancel.assert_called_once_with()

    # the scheduler ignores the cancellation and fires anyway
    scheduler.callbacks[0]()
    for _ in range(5):
        await asyncio.sleep(0)

    assert future.cancelled()
    assert scripted.call_count == 1


@pytest.mark.asyncio
async def test_async_waiter_executor_cancel_cancels_in_flight_attempt(
    polling_strategy: PollingStrategy,
) -> None:
    started = asyncio.Event()
    cancelled = []

    async def operation() -> str:
        started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return "done"

    future = AsyncWaiterExecutor(polling_strategy, [DONE]).execute(operation)
    await started.wait()
    future.cancel()
    for _ in range(5):
        await asyncio.sleep(0)

    assert future.cancelled()
    assert cancelled == [True]


@pytest.mark.asyncio
async def test_async_waiter_executor_polling_future_cancelled(
    polling_strategy: PollingStrategy,
) -> None:
    """Test that the waiter is cancelled when the polling future is
    cancelled by someone else."""
    polling_future = asyncio.get_running_loop().create_future()
    future = AsyncWaiterExecutor(polling_strategy, [DONE]).execute(lambda: polling_future)
    polling_future.cancel()

    with pytest.raises(asyncio.CancelledError):
        await future


@pytest.mark.asyncio
async def test_async_waiter_executor_callback_error_fails_future(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    on_retry = Mock(side_effect=RuntimeError("callback failed"))
    operation, scripted = async_operation(["pending", "done"])
    executor = AsyncWaiterExecutor(
        polling_strategy, [DONE], scheduler, CallbackConfig(on_retry=on_retry)
    )
    with pytest.raises(RuntimeError, match=r"callback failed"):
        await executor.execute(operation)

    assert scripted.call_count == 1


@pytest.mark.asyncio
async def test_async_waiter_executor_callbacks(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    on_attempt, on_retry, on_success = Mock(), Mock(), Mock()
    operation, _ = async_operation(["pending", "done"])
    await AsyncWaiterExecutor(
        polling_strategy,
        [DONE],
        scheduler,
        CallbackConfig(on_attempt=on_attempt, on_retry=on_retry, on_success=on_success),
    ).execute(operation)

    assert on_attempt.call_count == 2
    assert on_retry.call_args.args[0].value == "pending"
    assert on_success.call_args.args[0].attempt == 2


@pytest.mark.asyncio
async def test_async_waiter_executor_on_failure_callback(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    on_failure = Mock()
    operation, _ = async_operation([ValueError("unexpected")])
    with pytest.raises(UnmatchedFailureError) as exc_info:
        await AsyncWaiterExecutor(
            polling_strategy, [DONE], scheduler, CallbackConfig(on_failure=on_failure)
        ).execute(operation)

    assert on_failure.call_args.args[0].error is exc_info.value


@pytest.mark.asyncio
async def test_async_waiter_executor_concurrent_executions(
    polling_strategy: PollingStrategy, scheduler: RecordingScheduler
) -> None:
    """Test that concurrent executions have independent attempt counters."""
    executor = AsyncWaiterExecutor(polling_strategy, [DONE], scheduler)
    first, _ = async_operation(["pending", "pending", "done"])
    second, _ = async_operation(["done"])

    responses = await asyncio.gather(executor.execute(first), executor.execute(second))

    assert [response.attempts_executed for response in responses] == [3, 1]


@pytest.mark.asyncio
async def test_async_waiter_executor_thread_scheduler() -> None:
    """Test a scheduler firing callbacks outside the event loop thread."""
    strategy = PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(delay=0.01))
    operation, _ = async_operation(["pending", "done"])
    response = await asyncio.wait_for(
        AsyncWaiterExecutor(strategy, [DONE], ThreadTimerScheduler()).execute(operation),
        timeout=5.0,
    )

    assert response.attempts_executed == 2
