import pytest

import lazycache.cache as cache_mod
import lazycache.cache_async as cache_async_mod


class FakeClock:
    """Integer millisecond clock driven by the test."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock(monkeypatch):
    c = FakeClock()
    monkeypatch.setattr(cache_mod, "now_ms", c)
    monkeypatch.setattr(cache_async_mod, "now_ms", c)
    return c


@pytest.fixture
def evicted():
    return []
