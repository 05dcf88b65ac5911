from __future__ import annotations

from typing import List

import pytest

from activity_timer import ActivityTimer


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def advance(self, ms: int) -> None:
        self.now += ms

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def messages() -> List[str]:
    return []


@pytest.fixture
def timer(clock: FakeClock, messages: List[str]) -> ActivityTimer:
    return ActivityTimer(handlers=[messages.append], clock=clock)
