from __future__ import annotations

import json

import pytest

from nihongo_translate.errors import StorageError
from nihongo_translate.rate_limit import (
    DEFAULT_WAIT_SECONDS,
    STORAGE_KEY,
    RateLimiter,
    wait_seconds,
)
from nihongo_translate.storage import MemoryStorage


class FakeClock:
    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class BrokenStorage:
    def get(self, key: str) -> str | None:
        raise StorageError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        raise AssertionError("must not write")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def test_blocks_after_max_requests(clock: FakeClock) -> None:
    limiter = RateLimiter(storage=MemoryStorage(), clock=clock)
    first = clock.now

    for _ in range(10):
        assert limiter.check_and_record().allowed is True
        clock.advance(100)

    decision = limiter.check_and_record()

    assert decision.allowed is False
    assert decision.reset_time_ms == first + 60_000
    assert decision.reset_time_ms > clock.now


def test_admits_again_once_oldest_leaves_window(clock: FakeClock) -> None:
    limiter = RateLimiter(storage=MemoryStorage(), clock=clock)
    first = clock.now
    for _ in range(10):
        limiter.check_and_record()
        clock.advance(1_000)
    assert limiter.check_and_record().allowed is False

    clock.now = first + 60_000

    assert limiter.check_and_record().allowed is True


def test_rejected_call_is_not_recorded(clock: FakeClock) -> None:
    storage = MemoryStorage()
    limiter = RateLimiter(storage=storage, max_requests=2, clock=clock)
    limiter.check_and_record()
    limiter.check_and_record()

    limiter.check_and_record()

    assert json.loads(storage.get(STORAGE_KEY) or "[]") == [clock.now, clock.now]


def test_stale_entries_are_dropped_on_write(clock: FakeClock) -> None:
    storage = MemoryStorage()
    storage.set(STORAGE_KEY, json.dumps([clock.now - 120_000, clock.now - 10]))
    limiter = RateLimiter(storage=storage, clock=clock)

    assert limiter.check_and_record().allowed is True
    assert json.loads(storage.get(STORAGE_KEY) or "") == [clock.now - 10, clock.now]


@pytest.mark.parametrize("stored", ["not json", '{"a": 1}', "42"])
def test_corrupt_window_fails_open(clock: FakeClock, stored: str) -> None:
    storage = MemoryStorage()
    storage.set(STORAGE_KEY, stored)
    limiter = RateLimiter(storage=storage, max_requests=1, clock=clock)

    assert limiter.check_and_record().allowed is True
    assert limiter.check_and_record().allowed is True
    assert storage.get(STORAGE_KEY) == stored


def test_unreadable_storage_fails_open(clock: FakeClock) -> None:
    limiter = RateLimiter(storage=BrokenStorage(), max_requests=1, clock=clock)

    assert limiter.check_and_record().allowed is True


def test_non_numeric_entries_are_ignored(clock: FakeClock) -> None:
    storage = MemoryStorage()
    storage.set(STORAGE_KEY, json.dumps(["x", None, True, clock.now - 5]))
    limiter = RateLimiter(storage=storage, max_requests=2, clock=clock)

    assert limiter.check_and_record().allowed is True
    assert limiter.check_and_record().allowed is False


def test_wait_seconds() -> None:
    assert wait_seconds(None, 0) == DEFAULT_WAIT_SECONDS
    assert wait_seconds(10_001, 0) == 11
    assert wait_seconds(10_000, 0) == 10
    assert wait_seconds(5, 10) == 1


def test_zero_capacity_blocks_without_history(clock: FakeClock) -> None:
    storage = MemoryStorage()
    limiter = RateLimiter(storage=storage, max_requests=0, clock=clock)

    decision = limiter.check_and_record()

    assert decision.allowed is False
    assert decision.reset_time_ms == clock.now + 60_000
    assert storage.get(STORAGE_KEY) is None
