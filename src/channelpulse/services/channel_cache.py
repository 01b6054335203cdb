"""
Single-entry, time-windowed cache in front of the aggregator.

Lifecycle
---------
One ``ChannelCache`` is created per process (see
``channelpulse.container``). It holds zero or one ``CacheEntry``:

- **empty**: nothing loaded yet; the next read loads.
- **fresh**: entry younger than the TTL; reads are served from memory.
- **expired**: entry at or past the TTL; the next read reloads. If the
  reload fails the old record is served with ``stale=True`` and the
  entry stays expired until a reload succeeds.

A reload failure while empty raises ``AggregationFatal``. Entries are
replaced by swapping the whole object, so readers never see a partially
updated record. Reloads are serialised by a lock and a caller that waited
on it re-checks freshness first, so concurrent expired reads trigger one
upstream aggregation.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum

from channelpulse.exceptions import AggregationFatal
from channelpulse.models.channel import CacheEntry, ChannelRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 10 * 60


class CacheState(str, Enum):
    """Observable state of the cache slot."""

    EMPTY = "empty"
    FRESH = "fresh"
    EXPIRED = "expired"


class ChannelCache:
    """
    Memoizing holder for the latest ``ChannelRecord``.

    Parameters
    ----------
    loader : Callable[[], Awaitable[ChannelRecord]]
        Produces a new record, typically
        ``ChannelAggregator.fetch_channel_data``.
    ttl_seconds : float, optional
        Freshness window (default: 600).
    clock : Callable[[], float], optional
        Monotonic clock (default: ``time.monotonic``).

    Examples
    --------
    >>> cache = ChannelCache(aggregator.fetch_channel_data, ttl_seconds=600)
    >>> record, from_cache = await cache.get_channel_data()
    """

    def __init__(
        self,
        loader: Callable[[], Awaitable[ChannelRecord]],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._lock = asyncio.Lock()

    @property
    def entry(self) -> CacheEntry | None:
        """The current cache entry, if any."""
        return self._entry

    @property
    def state(self) -> CacheState:
        """Current state of the cache slot."""
        if self._entry is None:
            return CacheState.EMPTY
        if self._entry.is_fresh(self._clock(), self.ttl_seconds):
            return CacheState.FRESH
        return CacheState.EXPIRED

    def clear(self) -> None:
        """Drop the cached entry."""
        self._entry = None

    async def get_channel_data(self) -> tuple[ChannelRecord, bool]:
        """
        Return the channel record, reloading it if needed.

        Returns
        -------
        tuple[ChannelRecord, bool]
            The record and whether it was served from the cache (either a
            fresh hit or a stale fallback).

        Raises
        ------
        AggregationFatal
            If a reload failed and no previous record exists.
        """
        hit = self._fresh_record()
        if hit is not None:
            return hit, True

        async with self._lock:
            hit = self._fresh_record()
            if hit is not None:
                return hit, True
            return await self._reload()

    async def refresh(self) -> tuple[ChannelRecord, bool]:
        """Reload regardless of freshness; same failure handling as reads."""
        async with self._lock:
            return await self._reload()

    def _fresh_record(self) -> ChannelRecord | None:
        entry = self._entry
        if entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds):
            return entry.record
        return None

    async def _reload(self) -> tuple[ChannelRecord, bool]:
        started_at = self._clock()
        try:
            record = await self._loader()
        except Exception as e:
            previous = self._entry
            logger.error(
                "channel_fetch_failed: %s: %s (cached record %s)",
                type(e).__name__,
                e,
                "available" if previous is not None else "unavailable",
            )
            if previous is None:
                raise AggregationFatal("No channel data available") from e
            return previous.record.as_stale(), True

        self._entry = CacheEntry(record=record, fetched_at_monotonic=started_at)
        return record, False
