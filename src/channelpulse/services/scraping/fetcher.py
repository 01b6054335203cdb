"""
HTTP document fetcher for YouTube channel pages.

Retrieves a page with a browser-like user agent, lets httpx decode the
``gzip``/``deflate``/``br`` content encodings, and maps every failure onto
the channelpulse exception taxonomy. There is no retry at this layer.

Classes
-------
DocumentFetcher
    Async fetcher returning decoded page text.
"""

from __future__ import annotations

import logging

import httpx

from channelpulse.config.settings import DEFAULT_USER_AGENT
from channelpulse.exceptions import DecodeError, FetchError

logger = logging.getLogger(__name__)

_ACCEPT_ENCODING = "gzip, deflate, br"
_DEFAULT_TIMEOUT_SECONDS = 15.0


class DocumentFetcher:
    """
    Async fetcher for remote HTML documents.

    Parameters
    ----------
    user_agent : str, optional
        ``User-Agent`` header sent with every request.
    timeout : float, optional
        Per-request timeout in seconds.
    client : httpx.AsyncClient | None, optional
        Shared client to issue requests with. When omitted a short-lived
        client is opened for each call.

    Examples
    --------
    >>> fetcher = DocumentFetcher()
    >>> html = await fetcher.fetch("https://www.youtube.com/@example/about")
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = _DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._headers = {
            "User-Agent": user_agent,
            "Accept-Encoding": _ACCEPT_ENCODING,
        }
        self._timeout = timeout
        self._client = client

    async def fetch(self, url: str) -> str:
        """
        Fetch ``url`` and return the decoded body as text.

        Parameters
        ----------
        url : str
            Absolute URL of the document.

        Returns
        -------
        str
            Response body, decompressed according to ``Content-Encoding``.

        Raises
        ------
        FetchError
            If the status is outside ``[200, 300)`` or the request failed
            at the transport level.
        DecodeError
            If the body could not be decompressed.
        """
        if self._client is not None:
            return await self._fetch_with(self._client, url)

        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await self._fetch_with(client, url)

    async def _fetch_with(self, client: httpx.AsyncClient, url: str) -> str:
        try:
            async with client.stream(
                "GET",
                url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            ) as response:
                if not 200 <= response.status_code < 300:
                    raise FetchError(url, response.status_code)

                encoding = response.headers.get("content-encoding", "")
                try:
                    await response.aread()
                except httpx.DecodingError as e:
                    raise DecodeError(url, encoding) from e

                return response.text
        except httpx.RequestError as e:
            logger.debug("Transport failure fetching %s: %s", url, type(e).__name__)
            raise FetchError(
                url,
                message=f"Request failed for {url}: {type(e).__name__}",
            ) from e
