"""Tests for the TTL result cache."""

import pytest

from .cache import CACHE_TTL_SECONDS, ResultCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(clock=clock)


def test_default_ttl_is_sixty_seconds():
    assert CACHE_TTL_SECONDS == 60.0
    assert ResultCache().ttl_seconds == 60.0


def test_rejects_non_positive_ttl():
    with pytest.raises(ValueError):
        ResultCache(ttl_seconds=0)


def test_miss_on_unknown_key(cache):
    assert cache.get("discover:trending:20:0") is None


def test_put_then_get(cache):
    payload = [{"id": "a"}]
    cache.put("k", payload)
    assert cache.get("k") is payload


def test_repeated_gets_return_identical_payload(cache, clock):
    cache.put("k", [{"id": "a"}, {"id": "b"}])
    first = cache.get("k")
    clock.advance(30)
    second = cache.get("k")
    assert first is second


def test_entry_served_until_ttl(cache, clock):
    cache.put("k", ["x"])
    clock.advance(59.9)
    assert cache.get("k") == ["x"]


def test_entry_expires_at_ttl(cache, clock):
    cache.put("k", ["x"])
    clock.advance(60)
    assert cache.get("k") is None


def test_expired_read_evicts_entry(cache, clock):
    cache.put("k", ["x"])
    clock.advance(120)
    cache.get("k")
    assert len(cache) == 0


def test_put_overwrites_and_restarts_ttl(cache, clock):
    cache.put("k", ["old"])
    clock.advance(50)
    cache.put("k", ["new"])
    clock.advance(50)
    assert cache.get("k") == ["new"]


def test_keys_are_independent(cache):
    cache.put("discover:trending:20:0", ["a"])
    cache.put("discover:trending:20:1", ["b"])
    assert cache.get("discover:trending:20:0") == ["a"]
    assert cache.get("discover:trending:20:1") == ["b"]


def test_sweep_removes_only_expired_entries(cache, clock):
    cache.put("old", ["a"])
    clock.advance(30)
    cache.put("young", ["b"])
    clock.advance(31)

    assert cache.sweep() == 1
    assert len(cache) == 1
    assert cache.get("young") == ["b"]


def test_sweep_on_fresh_cache_is_noop(cache):
    cache.put("k", ["a"])
    assert cache.sweep() == 0
    assert cache.get("k") == ["a"]
