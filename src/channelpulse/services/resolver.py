"""
Channel handle to channel ID resolution.

A pre-configured channel ID short-circuits resolution and switches page
URLs to the ``/channel/{id}`` form. Otherwise the handle's profile page is
fetched and the first ``"channelId":"UC..."`` literal is taken.
"""

from __future__ import annotations

import logging
import re

from channelpulse.exceptions import DecodeError, FetchError, ResolutionError
from channelpulse.services.scraping.fetcher import DocumentFetcher

logger = logging.getLogger(__name__)

YOUTUBE_BASE_URL = "https://www.youtube.com"

_CHANNEL_ID_IN_PAGE_RE = re.compile(r'"channelId":"(UC[^"]+)"')


class ChannelResolver:
    """
    Resolves the configured channel to its ``UC...`` ID.

    Resolution is not cached; every aggregation re-derives the ID.

    Parameters
    ----------
    fetcher : DocumentFetcher
        Fetcher used to load the handle's profile page.
    handle : str
        Channel handle, with or without the leading ``@``.
    channel_id : str | None, optional
        Known channel ID. When set, no network call is made and page URLs
        are built from the ID instead of the handle.

    Examples
    --------
    >>> resolver = ChannelResolver(DocumentFetcher(), handle="example")
    >>> channel_id = await resolver.resolve_channel_id()
    """

    def __init__(
        self,
        fetcher: DocumentFetcher,
        handle: str,
        channel_id: str | None = None,
    ) -> None:
        self._fetcher = fetcher
        self.handle = handle.lstrip("@")
        self.configured_channel_id = channel_id or None

    @property
    def profile_url(self) -> str:
        """URL of the handle's channel home page."""
        return f"{YOUTUBE_BASE_URL}/@{self.handle}"

    def channel_url(self, channel_id: str, suffix: str = "") -> str:
        """
        Build the URL of a channel page.

        Parameters
        ----------
        channel_id : str
            Resolved channel ID.
        suffix : str, optional
            Path suffix such as ``"/about"`` (default: home page).
        """
        if self.configured_channel_id:
            return f"{YOUTUBE_BASE_URL}/channel/{channel_id}{suffix}"
        return f"{self.profile_url}{suffix}"

    async def resolve_channel_id(self) -> str:
        """
        Return the channel ID for the configured channel.

        Raises
        ------
        ResolutionError
            If the profile page could not be fetched or carries no
            channel ID.
        """
        if self.configured_channel_id:
            return self.configured_channel_id

        try:
            html = await self._fetcher.fetch(self.profile_url)
        except (FetchError, DecodeError) as e:
            raise ResolutionError(
                self.handle,
                message=f"Could not load profile page for @{self.handle}: {e.message}",
            ) from e

        match = _CHANNEL_ID_IN_PAGE_RE.search(html)
        if not match:
            raise ResolutionError(self.handle)

        channel_id = match.group(1)
        logger.debug("Resolved @%s to %s", self.handle, channel_id)
        return channel_id
