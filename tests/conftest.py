"""Shared fixtures for mars_cleanup tests."""

from __future__ import annotations

import pytest


class FakeClock:
    """Manually advanced clock; `sleep` moves time forward."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    sleep = advance


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
