"""Tests for the background cache sweeper."""

import asyncio
from contextlib import suppress

import pytest

from .lib.ranking import ResultCache
from .main import sweep_periodically


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.mark.asyncio
async def test_sweeper_reclaims_expired_entries():
    clock = FakeClock()
    cache = ResultCache(clock=clock)
    cache.put("discover:trending:20:0", [{"id": "A"}])
    clock.now += 61

    sweeper = asyncio.create_task(sweep_periodically(cache, 0.01))
    await asyncio.sleep(0.05)

    assert len(cache) == 0

    cache.put("explore:trending:20", [{"id": "p"}])
    await asyncio.sleep(0.05)
    assert cache.get("explore:trending:20") == [{"id": "p"}]

    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper
    assert sweeper.cancelled()


@pytest.mark.asyncio
async def test_sweeper_stops_cleanly_when_cancelled():
    sweeper = asyncio.create_task(sweep_periodically(ResultCache(), 60))
    await asyncio.sleep(0)

    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper

    assert sweeper.done()
