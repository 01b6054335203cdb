"""
Unit tests for ChannelCache.

Tests cover:
- Loading on first read and serving from memory within the TTL
- Reload after expiry
- Stale fallback when a reload fails with a previous record
- Fatal failure when nothing was ever loaded
- Single-flight reloads under concurrent reads
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from channelpulse.exceptions import AggregationFatal
from channelpulse.services.channel_cache import (
    DEFAULT_TTL_SECONDS,
    CacheState,
    ChannelCache,
)
from tests.factories import ChannelRecordFactory

# CRITICAL: Ensures async tests work with coverage
pytestmark = pytest.mark.asyncio

TTL = 600.0


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestChannelCache:
    """Tests for ChannelCache.get_channel_data."""

    async def test_first_read_loads(self, clock: FakeClock) -> None:
        record = ChannelRecordFactory()
        loader = AsyncMock(return_value=record)
        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        assert cache.state is CacheState.EMPTY
        assert await cache.get_channel_data() == (record, False)
        assert cache.state is CacheState.FRESH
        loader.assert_awaited_once()

    async def test_reads_within_ttl_are_served_from_memory(self, clock: FakeClock) -> None:
        record = ChannelRecordFactory()
        loader = AsyncMock(return_value=record)
        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        await cache.get_channel_data()
        clock.advance(TTL - 1)
        first = await cache.get_channel_data()
        second = await cache.get_channel_data()

        assert first == second == (record, True)
        assert loader.await_count == 1

    async def test_reload_after_ttl(self, clock: FakeClock) -> None:
        old = ChannelRecordFactory(subscriber_count=1)
        new = ChannelRecordFactory(subscriber_count=2)
        loader = AsyncMock(side_effect=[old, new])
        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        await cache.get_channel_data()
        clock.advance(TTL)

        assert cache.state is CacheState.EXPIRED
        assert await cache.get_channel_data() == (new, False)
        assert cache.entry is not None
        assert cache.entry.record is new

    async def test_failed_reload_serves_stale_record(self, clock: FakeClock) -> None:
        record = ChannelRecordFactory()
        loader = AsyncMock(side_effect=[record, AggregationFatal("upstream down")])
        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        await cache.get_channel_data()
        clock.advance(TTL + 1)
        stale, from_cache = await cache.get_channel_data()

        assert from_cache is True
        assert stale.stale is True
        assert stale.model_dump(exclude={"stale"}) == record.model_dump(exclude={"stale"})

    async def test_failed_reload_keeps_entry_expired(self, clock: FakeClock) -> None:
        record = ChannelRecordFactory()
        fresh = ChannelRecordFactory(subscriber_count=99)
        loader = AsyncMock(side_effect=[record, RuntimeError("boom"), fresh])
        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        await cache.get_channel_data()
        clock.advance(TTL)
        await cache.get_channel_data()

        assert cache.state is CacheState.EXPIRED
        assert cache.entry is not None
        assert cache.entry.record is record
        assert cache.entry.record.stale is None

        assert await cache.get_channel_data() == (fresh, False)
        assert loader.await_count == 3

    async def test_failure_while_empty_is_fatal(self, clock: FakeClock) -> None:
        loader = AsyncMock(side_effect=RuntimeError("boom"))
        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        with pytest.raises(AggregationFatal):
            await cache.get_channel_data()

        assert cache.state is CacheState.EMPTY

    async def test_entry_timestamp_taken_before_load(self, clock: FakeClock) -> None:
        record = ChannelRecordFactory()

        async def slow_loader():
            clock.advance(30)
            return record

        cache = ChannelCache(slow_loader, ttl_seconds=TTL, clock=clock)

        await cache.get_channel_data()

        assert cache.entry is not None
        assert cache.entry.fetched_at_monotonic == 1000.0
        assert cache.entry.age(clock()) == 30

    async def test_concurrent_reads_trigger_one_load(self, clock: FakeClock) -> None:
        record = ChannelRecordFactory()
        calls = 0

        async def loader():
            nonlocal calls
            calls += 1
            for _ in range(5):
                await asyncio.sleep(0)
            return record

        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        results = await asyncio.gather(*(cache.get_channel_data() for _ in range(5)))

        assert calls == 1
        assert all(result_record is record for result_record, _ in results)
        assert sorted(from_cache for _, from_cache in results) == [False, True, True, True, True]

    async def test_refresh_reloads_fresh_entry(self, clock: FakeClock) -> None:
        first = ChannelRecordFactory(subscriber_count=1)
        second = ChannelRecordFactory(subscriber_count=2)
        loader = AsyncMock(side_effect=[first, second])
        cache = ChannelCache(loader, ttl_seconds=TTL, clock=clock)

        await cache.get_channel_data()

        assert await cache.refresh() == (second, False)

    async def test_clear_empties_cache(self, clock: FakeClock) -> None:
        cache = ChannelCache(AsyncMock(return_value=ChannelRecordFactory()), clock=clock)
        await cache.get_channel_data()

        cache.clear()

        assert cache.state is CacheState.EMPTY
        assert cache.entry is None

    async def test_default_ttl_is_ten_minutes(self) -> None:
        cache = ChannelCache(AsyncMock())

        assert cache.ttl_seconds == DEFAULT_TTL_SECONDS == 600
