"""
Abstract Base Class for structured channel-statistics clients.

This interface defines the contract the aggregator relies on, enabling:
- Testability via mock implementations
- Swappable implementations (YouTube Data API, scraping libraries, fixtures)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from channelpulse.models.channel import ChannelInfo, ChannelStats


class ChannelInfoClientInterface(ABC):
    """
    Abstract interface for structured channel statistics.

    Both methods are best-effort: implementations raise on failure, or
    return a ``ChannelInfo`` with ``alert_message`` set when the upstream
    answered without usable data. The aggregator treats either outcome
    as "no data" for that tier.

    Examples
    --------
    >>> class FixedClient(ChannelInfoClientInterface):
    ...     async def get_channel_info(self, channel_id: str) -> ChannelInfo:
    ...         return ChannelInfo(author="Example", subscriber_count=500)
    ...     async def get_channel_stats(self, channel_id: str) -> ChannelStats:
    ...         return ChannelStats(view_count=10_000)
    """

    @abstractmethod
    async def get_channel_info(self, channel_id: str) -> ChannelInfo:
        """
        Get author name, avatar and subscriber information for a channel.

        Parameters
        ----------
        channel_id : str
            The ``UC...`` channel ID.

        Returns
        -------
        ChannelInfo
            Channel information; ``alert_message`` is set if the upstream
            reported no usable data.
        """
        pass

    @abstractmethod
    async def get_channel_stats(self, channel_id: str) -> ChannelStats:
        """
        Get numeric statistics (total views) for a channel.

        Parameters
        ----------
        channel_id : str
            The ``UC...`` channel ID.

        Returns
        -------
        ChannelStats
            Channel statistics.
        """
        pass
