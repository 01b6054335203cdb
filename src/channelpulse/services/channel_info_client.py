"""
YouTube Data API client for structured channel statistics.

Uses ``channels.list`` with API-key authentication. The Google client is
synchronous, so requests run in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from channelpulse.exceptions import ChannelInfoError
from channelpulse.models.channel import ChannelInfo, ChannelStats, Thumbnail
from channelpulse.services.interfaces.channel_info_interface import (
    ChannelInfoClientInterface,
)

logger = logging.getLogger(__name__)

# Thumbnail keys from smallest to largest, used when widths are missing.
_THUMBNAIL_ORDER = ["default", "medium", "high", "standard", "maxres"]


def _to_int(value: Any) -> Optional[int]:
    """Convert the API's string counts to int."""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _ordered_thumbnails(thumbnails: Dict[str, Any]) -> List[Thumbnail]:
    """Order the API's thumbnail map smallest first."""
    entries = {
        key: entry
        for key, entry in thumbnails.items()
        if isinstance(entry, dict) and entry.get("url")
    }

    def _rank(key: str) -> tuple[int, int]:
        width = _to_int(entries[key].get("width")) or 0
        position = (
            _THUMBNAIL_ORDER.index(key) if key in _THUMBNAIL_ORDER else len(_THUMBNAIL_ORDER)
        )
        return (width, position)

    return [
        Thumbnail(
            url=entries[key]["url"],
            width=_to_int(entries[key].get("width")),
            height=_to_int(entries[key].get("height")),
        )
        for key in sorted(entries, key=_rank)
    ]


class YouTubeChannelInfoClient(ChannelInfoClientInterface):
    """
    Structured channel statistics from the YouTube Data API v3.

    Parameters
    ----------
    api_key : str
        YouTube Data API key. Every call raises ``ChannelInfoError`` when
        empty.
    service : Any, optional
        Pre-built API resource, mainly for tests. Built lazily otherwise.
    """

    def __init__(self, api_key: str, service: Any = None) -> None:
        self._api_key = api_key
        self._service = service

    @property
    def service(self) -> Any:
        """Get the YouTube API resource, building it on first use."""
        if self._service is None:
            if not self._api_key:
                raise ChannelInfoError("YouTube API key is not configured")
            self._service = build(
                "youtube", "v3", developerKey=self._api_key, cache_discovery=False
            )
        return self._service

    async def _fetch_channel(self, channel_id: str, part: str) -> Optional[Dict[str, Any]]:
        """Return the first ``channels.list`` item for ``channel_id``, or None."""

        def _execute() -> Dict[str, Any]:
            request = self.service.channels().list(part=part, id=channel_id)
            return dict(request.execute())

        try:
            response = await asyncio.to_thread(_execute)
        except HttpError as e:
            raise ChannelInfoError(
                f"YouTube API request for channel {channel_id} failed "
                f"with status {e.resp.status}"
            ) from e

        items = response.get("items") or []
        if not items:
            return None
        return dict(items[0])

    async def get_channel_info(self, channel_id: str) -> ChannelInfo:
        """
        Get the channel title, avatars and subscriber count.

        A channel the API does not know is reported through
        ``alert_message`` rather than an exception. Hidden subscriber
        counts come back as None.
        """
        item = await self._fetch_channel(channel_id, part="snippet,statistics")
        if item is None:
            return ChannelInfo(alert_message=f"Channel {channel_id} was not found")

        snippet = item.get("snippet", {})
        statistics = item.get("statistics", {})

        subscriber_count: Optional[int] = None
        if not statistics.get("hiddenSubscriberCount"):
            subscriber_count = _to_int(statistics.get("subscriberCount"))

        return ChannelInfo(
            author=snippet.get("title"),
            author_thumbnails=_ordered_thumbnails(snippet.get("thumbnails", {})),
            subscriber_count=subscriber_count,
        )

    async def get_channel_stats(self, channel_id: str) -> ChannelStats:
        """Get the channel's total view count."""
        item = await self._fetch_channel(channel_id, part="statistics")
        if item is None:
            raise ChannelInfoError(f"Channel {channel_id} was not found")

        return ChannelStats(view_count=_to_int(item.get("statistics", {}).get("viewCount")))
