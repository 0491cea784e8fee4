from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Leap day, mid-afternoon, with a sub-millisecond remainder.
    return datetime(2024, 2, 29, 15, 45, 30, 123456, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock(fixed_now: datetime) -> Callable[[], datetime]:
    return lambda: fixed_now


@pytest.fixture
def clock_factory() -> Callable[..., Callable[[], datetime]]:
    def _factory(*args: int, tz=timezone.utc) -> Callable[[], datetime]:
        moment = datetime(*args, tzinfo=tz)
        return lambda: moment

    return _factory
