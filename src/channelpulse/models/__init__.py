"""
Data models for channelpulse.

Pydantic models for upstream client responses, per-source extraction
results, the aggregated channel record and the cache slot.
"""

from __future__ import annotations

from channelpulse.models.channel import (
    STAT_FIELDS,
    CacheEntry,
    ChannelInfo,
    ChannelRecord,
    ChannelStats,
    ExtractionResult,
    Thumbnail,
)

__all__ = [
    "STAT_FIELDS",
    "CacheEntry",
    "ChannelInfo",
    "ChannelRecord",
    "ChannelStats",
    "ExtractionResult",
    "Thumbnail",
]
