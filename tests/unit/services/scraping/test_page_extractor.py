"""
Unit tests for per-page statistics extraction.
"""

from __future__ import annotations

from channelpulse.models.channel import ExtractionResult
from channelpulse.services.scraping.page_extractor import (
    extract_from_html,
    extract_from_initial_data,
    last_thumbnail_url,
)
from tests.factories import make_channel_page, make_initial_data


class TestLastThumbnailUrl:
    """Tests for last_thumbnail_url."""

    def test_returns_last_entry(self) -> None:
        node = {"thumbnails": [{"url": "small"}, {"url": "large"}]}

        assert last_thumbnail_url(node) == "large"

    def test_empty_list(self) -> None:
        assert last_thumbnail_url({"thumbnails": []}) is None

    def test_not_an_object(self) -> None:
        assert last_thumbnail_url(None) is None
        assert last_thumbnail_url("avatar") is None

    def test_last_entry_without_url(self) -> None:
        assert last_thumbnail_url({"thumbnails": [{"url": "a"}, {"width": 10}]}) is None


class TestExtractFromInitialData:
    """Tests for extract_from_initial_data."""

    def test_home_page_fields(self) -> None:
        data = make_initial_data(
            subscriber_text="1.23万人",
            videos_text="42 videos",
            avatar_urls=["https://yt3.ggpht.com/a=s48", "https://yt3.ggpht.com/a=s900"],
        )

        result = extract_from_initial_data(data)

        assert result == ExtractionResult(
            subscriber_count=12300,
            subscriber_text="1.23万人",
            video_count=42,
            avatar_url="https://yt3.ggpht.com/a=s900",
        )

    def test_views_ignored_unless_requested(self) -> None:
        data = make_initial_data(view_text="1,234,567 views")

        assert extract_from_initial_data(data).view_count is None

    def test_views_read_from_about_block(self) -> None:
        data = make_initial_data(view_text="1,234,567 views")

        result = extract_from_initial_data(data, include_views=True)

        assert result.view_count == 1234567
        assert result.view_text == "1,234,567 views"

    def test_video_count_text_fallback(self) -> None:
        data = {"tabs": [{"videoCountText": {"runs": [{"text": "1,024"}, {"text": " videos"}]}}]}

        result = extract_from_initial_data(data)

        assert result.video_count == 1024

    def test_videos_count_text_preferred(self) -> None:
        data = {
            "a": {"videoCountText": {"simpleText": "1 video"}},
            "b": {"videosCountText": {"simpleText": "99 videos"}},
        }

        assert extract_from_initial_data(data).video_count == 99

    def test_empty_data(self) -> None:
        assert extract_from_initial_data({}).is_empty()


class TestExtractFromHtml:
    """Tests for extract_from_html."""

    def test_extracts_from_page(self) -> None:
        html = make_channel_page(make_initial_data(subscriber_text="2.1M subscribers"))

        result = extract_from_html(html)

        assert result.subscriber_count == 2100000
        assert result.subscriber_text == "2.1M subscribers"

    def test_page_without_initial_data_is_empty(self) -> None:
        assert extract_from_html("<html><body>consent wall</body></html>").is_empty()

    def test_malformed_initial_data_is_empty(self) -> None:
        html = '<script>var ytInitialData = {"header": {,}};</script>'

        assert extract_from_html(html) == ExtractionResult.empty()

    def test_deeply_nested_initial_data_is_empty(self) -> None:
        depth = 50_000
        html = (
            "<script>var ytInitialData = "
            + '{"a":' * depth
            + "1"
            + "}" * depth
            + ";</script>"
        )

        assert extract_from_html(html).is_empty()
