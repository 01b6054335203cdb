"""
Unit tests for DocumentFetcher.

All tests run against ``httpx.MockTransport``. No live HTTP calls are
made.
"""

from __future__ import annotations

import gzip
import zlib
from collections.abc import AsyncIterator

import brotli
import httpx
import pytest

from channelpulse.exceptions import DecodeError, FetchError
from channelpulse.services.scraping.fetcher import DocumentFetcher

# CRITICAL: Ensures async tests work with coverage
pytestmark = pytest.mark.asyncio

URL = "https://www.youtube.com/@disboyrbx/about"


class _AsyncBody(httpx.AsyncByteStream):
    """Unread response body, so decoding happens on ``aread``."""

    def __init__(self, data: bytes) -> None:
        self._data = data

    async def __aiter__(self) -> AsyncIterator[bytes]:
        yield self._data


def _fetcher(handler) -> DocumentFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DocumentFetcher(user_agent="test-agent/1.0", timeout=5.0, client=client)


class TestDocumentFetcher:
    """Tests for DocumentFetcher.fetch."""

    async def test_returns_body_text(self) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(200, text="<html>ok</html>"))

        assert await fetcher.fetch(URL) == "<html>ok</html>"

    async def test_sends_browser_headers(self) -> None:
        seen: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, text="ok")

        await _fetcher(handler).fetch(URL)

        assert seen["user-agent"] == "test-agent/1.0"
        assert seen["accept-encoding"] == "gzip, deflate, br"

    @pytest.mark.parametrize(
        "encoding,compress",
        [
            ("gzip", gzip.compress),
            ("deflate", zlib.compress),
            ("br", brotli.compress),
        ],
    )
    async def test_decodes_compressed_body(self, encoding: str, compress) -> None:
        body = "<html>チャンネル登録者数 12.3万人</html>"

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={
                    "content-encoding": encoding,
                    "content-type": "text/html; charset=utf-8",
                },
                stream=_AsyncBody(compress(body.encode("utf-8"))),
            )

        assert await _fetcher(handler).fetch(URL) == body

    @pytest.mark.parametrize("encoding", ["gzip", "br"])
    async def test_corrupt_body_raises_decode_error(self, encoding: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={"content-encoding": encoding},
                stream=_AsyncBody(b"definitely not compressed"),
            )

        with pytest.raises(DecodeError) as exc_info:
            await _fetcher(handler).fetch(URL)

        assert exc_info.value.url == URL
        assert exc_info.value.encoding == encoding

    @pytest.mark.parametrize("status", [404, 429, 500, 503])
    async def test_non_success_status_raises(self, status: int) -> None:
        fetcher = _fetcher(lambda request: httpx.Response(status, text="nope"))

        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch(URL)

        assert exc_info.value.status_code == status
        assert exc_info.value.url == URL

    async def test_transport_error_raises_with_status_zero(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError) as exc_info:
            await _fetcher(handler).fetch(URL)

        assert exc_info.value.status_code == 0
        assert "ConnectError" in exc_info.value.message

    async def test_follows_redirects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/@disboyrbx/about":
                return httpx.Response(
                    302, headers={"location": "https://www.youtube.com/channel/UC1/about"}
                )
            return httpx.Response(200, text="redirected")

        assert await _fetcher(handler).fetch(URL) == "redirected"
