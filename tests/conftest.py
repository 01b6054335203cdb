"""
Pytest configuration and fixtures for channelpulse tests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Union
from unittest.mock import AsyncMock, MagicMock

import pytest

from channelpulse.config.settings import Settings
from channelpulse.container import container
from channelpulse.exceptions import FetchError
from channelpulse.models.channel import ChannelInfo, ChannelStats, Thumbnail
from channelpulse.services.interfaces.channel_info_interface import (
    ChannelInfoClientInterface,
)
from channelpulse.services.scraping.fetcher import DocumentFetcher

PageMap = Mapping[str, Union[str, Exception]]


@pytest.fixture(autouse=True)
def reset_container() -> Iterator[None]:
    """Drop container singletons between tests."""
    yield
    container.reset()


@pytest.fixture
def mock_settings() -> Settings:
    """Settings for a handle-configured channel."""
    return Settings(
        channel_handle="@disboyrbx",
        youtube_api_key="test_api_key",
        cache_ttl_seconds=600,
    )


@pytest.fixture
def make_fetcher() -> Callable[[PageMap], MagicMock]:
    """
    Build a mock DocumentFetcher serving canned pages.

    URLs missing from the map answer with a 404 ``FetchError``; exception
    values are raised instead of returned.
    """

    def _make(pages: PageMap) -> MagicMock:
        def _fetch(url: str) -> str:
            outcome = pages.get(url)
            if outcome is None:
                raise FetchError(url, 404)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        fetcher = MagicMock(spec=DocumentFetcher)
        fetcher.fetch = AsyncMock(side_effect=_fetch)
        return fetcher

    return _make


@pytest.fixture
def mock_info_client() -> AsyncMock:
    """Mock structured-stats client with a fully populated channel."""
    client = AsyncMock(spec=ChannelInfoClientInterface)
    client.get_channel_info.return_value = ChannelInfo(
        author="DisBoy",
        author_thumbnails=[
            Thumbnail(url="https://yt3.ggpht.com/api-avatar=s88", width=88, height=88),
            Thumbnail(url="https://yt3.ggpht.com/api-avatar=s800", width=800, height=800),
        ],
        subscriber_count=12345,
    )
    client.get_channel_stats.return_value = ChannelStats(view_count=987654)
    return client
