"""
Dependency Injection Container for channelpulse.

Wires settings into the fetcher, resolver, structured-stats client,
aggregator and cache, and keeps one instance of each for the process.

Usage
-----
    >>> from channelpulse.container import container
    >>> record, from_cache = await container.channel_cache.get_channel_data()

Design Principles
-----------------
- Services are singletons cached via @cached_property (lazy initialization)
- The cache is created once, so every request shares the same entry
- Container can be reset for testing isolation
"""

from __future__ import annotations

from functools import cached_property
from typing import Optional

from channelpulse.config.settings import Settings
from channelpulse.config.settings import settings as default_settings
from channelpulse.services.aggregator import ChannelAggregator
from channelpulse.services.channel_cache import ChannelCache
from channelpulse.services.channel_info_client import YouTubeChannelInfoClient
from channelpulse.services.interfaces.channel_info_interface import (
    ChannelInfoClientInterface,
)
from channelpulse.services.resolver import ChannelResolver
from channelpulse.services.scraping.fetcher import DocumentFetcher

_SINGLETONS = (
    "fetcher",
    "resolver",
    "channel_info_client",
    "aggregator",
    "channel_cache",
)


class Container:
    """
    Dependency injection container for channelpulse.

    Parameters
    ----------
    settings : Settings | None, optional
        Settings to build services from (default: the global settings).

    Examples
    --------
    >>> container = Container()
    >>> container.channel_cache is container.channel_cache
    True
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings

    @cached_property
    def fetcher(self) -> DocumentFetcher:
        """Get the singleton DocumentFetcher."""
        return DocumentFetcher(
            user_agent=self.settings.user_agent,
            timeout=self.settings.request_timeout,
        )

    @cached_property
    def resolver(self) -> ChannelResolver:
        """Get the singleton ChannelResolver for the configured channel."""
        return ChannelResolver(
            self.fetcher,
            handle=self.settings.channel_handle,
            channel_id=self.settings.channel_id,
        )

    @cached_property
    def channel_info_client(self) -> ChannelInfoClientInterface:
        """Get the singleton structured-stats client."""
        return YouTubeChannelInfoClient(api_key=self.settings.youtube_api_key)

    @cached_property
    def aggregator(self) -> ChannelAggregator:
        """Get the singleton ChannelAggregator."""
        return ChannelAggregator(
            resolver=self.resolver,
            fetcher=self.fetcher,
            info_client=self.channel_info_client,
        )

    @cached_property
    def channel_cache(self) -> ChannelCache:
        """
        Get the singleton ChannelCache.

        Created once per process; all API requests share its entry.
        """
        return ChannelCache(
            self.aggregator.fetch_channel_data,
            ttl_seconds=self.settings.cache_ttl_seconds,
        )

    # -------------------------------------------------------------------------
    # Testing Support
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """
        Reset the container by clearing all cached singleton instances.

        Examples
        --------
        >>> container.reset()
        >>> # All cached singletons are cleared
        """
        for prop in _SINGLETONS:
            self.__dict__.pop(prop, None)


# Global container instance
container = Container()
