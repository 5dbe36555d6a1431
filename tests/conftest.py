from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from awaiter import PollingStrategy
from awaiter.backoff import ConstantBackoff
from tests.helpers import RecordingScheduler

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def polling_strategy() -> PollingStrategy:
    """Create a polling strategy with 3 attempts and a constant 1s
    delay."""
    return PollingStrategy(max_attempts=3, backoff_strategy=ConstantBackoff(delay=1.0))


@pytest.fixture
def scheduler() -> RecordingScheduler:
    """Create a scheduler recording the requested delays and firing
    callbacks on the next loop iteration."""
    return RecordingScheduler()


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()
