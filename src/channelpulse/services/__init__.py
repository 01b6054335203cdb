"""
Service layer for channelpulse.

Channel resolution, the structured-stats client, page scraping,
aggregation and the in-memory cache.
"""

from channelpulse.services.aggregator import ChannelAggregator
from channelpulse.services.channel_cache import CacheState, ChannelCache
from channelpulse.services.channel_info_client import YouTubeChannelInfoClient
from channelpulse.services.resolver import ChannelResolver

__all__ = [
    "CacheState",
    "ChannelAggregator",
    "ChannelCache",
    "ChannelResolver",
    "YouTubeChannelInfoClient",
]
