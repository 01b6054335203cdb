"""
Channel statistics aggregation.

Combines the structured-stats client and three channel pages (home,
about, videos) into a single ``ChannelRecord``. Only channel ID
resolution is fatal; every other source may fail on its own and simply
contributes nothing.

Precedence, highest first: API channel info, API channel stats, home
page, about page, videos page.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from channelpulse.exceptions import AggregationFatal, ResolutionError
from channelpulse.models.channel import ChannelInfo, ChannelRecord, ExtractionResult
from channelpulse.services.interfaces.channel_info_interface import (
    ChannelInfoClientInterface,
)
from channelpulse.services.merge import merge_results
from channelpulse.services.resolver import ChannelResolver
from channelpulse.services.scraping.fetcher import DocumentFetcher
from channelpulse.services.scraping.page_extractor import extract_from_html

logger = logging.getLogger(__name__)

CHANNEL_PAGES: tuple[tuple[str, str], ...] = (
    ("home", ""),
    ("about", "/about"),
    ("videos", "/videos"),
)
"""(source name, path suffix) for each scraped page, in precedence order."""

VIEWS_PAGE = "about"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def info_to_result(info: ChannelInfo) -> ExtractionResult:
    """Map structured channel info onto the shared extraction fields."""
    avatar_url = info.author_thumbnails[-1].url if info.author_thumbnails else None
    return ExtractionResult(
        subscriber_count=info.subscriber_count,
        subscriber_text=info.subscriber_text,
        avatar_url=avatar_url,
    )


class ChannelAggregator:
    """
    Builds a ``ChannelRecord`` from every available source.

    Parameters
    ----------
    resolver : ChannelResolver
        Resolves the configured channel and builds page URLs.
    fetcher : DocumentFetcher
        Fetcher for the channel pages.
    info_client : ChannelInfoClientInterface
        Structured-stats client.
    clock : Callable[[], datetime], optional
        Source of the record's ``fetched_at`` timestamp (default: UTC now).

    Examples
    --------
    >>> aggregator = ChannelAggregator(resolver, fetcher, info_client)
    >>> record = await aggregator.fetch_channel_data()
    >>> record.subscriber_count
    12300
    """

    def __init__(
        self,
        resolver: ChannelResolver,
        fetcher: DocumentFetcher,
        info_client: ChannelInfoClientInterface,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self._info_client = info_client
        self._clock = clock

    async def fetch_channel_data(self) -> ChannelRecord:
        """
        Aggregate the channel's statistics from all sources.

        Returns
        -------
        ChannelRecord
            The merged record. Fields no source could provide are None.

        Raises
        ------
        AggregationFatal
            If the channel ID could not be resolved.
        """
        try:
            channel_id = await self._resolver.resolve_channel_id()
        except ResolutionError as e:
            raise AggregationFatal(f"Channel ID resolution failed: {e.message}") from e

        info = await self._fetch_info(channel_id)
        stats_result = await self._fetch_stats(channel_id)
        page_results = await self._fetch_pages(channel_id)

        merged = merge_results(
            [
                ("api_info", info_to_result(info) if info else ExtractionResult.empty()),
                ("api_stats", stats_result),
                *page_results,
            ]
        )

        title = info.author if info is not None and info.author else self._resolver.handle

        return ChannelRecord(
            title=title,
            channel_id=channel_id,
            handle=f"@{self._resolver.handle}",
            subscriber_count=merged.subscriber_count,
            subscriber_text=merged.subscriber_text,
            video_count=merged.video_count,
            view_count=merged.view_count,
            view_text=merged.view_text,
            avatar_url=merged.avatar_url,
            fetched_at=self._clock(),
        )

    async def _fetch_info(self, channel_id: str) -> ChannelInfo | None:
        """Channel info from the structured client, or None if unusable."""
        try:
            info = await self._info_client.get_channel_info(channel_id)
        except Exception as e:
            logger.warning(
                "get_channel_info failed for %s: %s: %s",
                channel_id,
                type(e).__name__,
                e,
            )
            return None

        if info.alert_message:
            logger.warning(
                "get_channel_info returned an alert for %s: %s",
                channel_id,
                info.alert_message,
            )
            return None
        return info

    async def _fetch_stats(self, channel_id: str) -> ExtractionResult:
        """View count from the structured client, or an empty result."""
        try:
            stats = await self._info_client.get_channel_stats(channel_id)
        except Exception as e:
            logger.warning(
                "get_channel_stats failed for %s: %s: %s",
                channel_id,
                type(e).__name__,
                e,
            )
            return ExtractionResult.empty()

        if stats.view_count is None:
            return ExtractionResult.empty()
        return ExtractionResult(view_count=stats.view_count, view_text=str(stats.view_count))

    async def _fetch_pages(self, channel_id: str) -> list[tuple[str, ExtractionResult]]:
        """
        Fetch all channel pages concurrently and extract each one.

        Pages are parsed in a worker thread. Failed fetches and failed
        extractions are logged and skipped; they never cancel or
        invalidate the other pages.
        """
        urls = [self._resolver.channel_url(channel_id, suffix) for _, suffix in CHANNEL_PAGES]
        outcomes = await asyncio.gather(
            *(self._fetcher.fetch(url) for url in urls),
            return_exceptions=True,
        )

        results: list[tuple[str, ExtractionResult]] = []
        for (page, _), url, outcome in zip(CHANNEL_PAGES, urls, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.warning(
                    "Fetching %s page (%s) failed: %s: %s",
                    page,
                    url,
                    type(outcome).__name__,
                    outcome,
                )
                continue

            try:
                result = await asyncio.to_thread(
                    extract_from_html, outcome, include_views=page == VIEWS_PAGE
                )
            except Exception as e:
                logger.warning(
                    "Extracting %s page (%s) failed: %s: %s",
                    page,
                    url,
                    type(e).__name__,
                    e,
                )
                continue
            results.append((page, result))
        return results
