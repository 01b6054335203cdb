"""
Custom exceptions for the channelpulse application.

This module defines domain-specific exceptions for the fetch, resolve,
extract and aggregate stages. Only ``AggregationFatal`` is allowed to
escape the cache layer; everything else is caught where it happens and
degrades the affected fields to ``None``.
"""

from __future__ import annotations


class ChannelPulseError(Exception):
    """Base exception for all channelpulse errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize ChannelPulseError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class FetchError(ChannelPulseError):
    """
    Exception raised when a remote document cannot be retrieved.

    Covers both non-2xx responses and transport failures (DNS, connect,
    read timeouts). Transport failures carry ``status_code=0``.

    Attributes
    ----------
    message : str
        Human-readable error message.
    url : str
        The URL that was requested.
    status_code : int
        HTTP status code of the response, or 0 if none was received.

    Examples
    --------
    >>> try:
    ...     html = await fetcher.fetch(url)
    ... except FetchError as e:
    ...     print(f"{e.url} failed with {e.status_code}")
    """

    def __init__(
        self,
        url: str,
        status_code: int = 0,
        message: str | None = None,
    ) -> None:
        """
        Initialize FetchError.

        Parameters
        ----------
        url : str
            The URL that was requested.
        status_code : int, optional
            HTTP status code, or 0 for transport failures (default: 0).
        message : str | None, optional
            Override for the default message (default: None).
        """
        self.url = url
        self.status_code = status_code
        super().__init__(message or f"Request failed ({status_code}) for {url}")


class DecodeError(ChannelPulseError):
    """
    Exception raised when a response body cannot be decompressed.

    Attributes
    ----------
    message : str
        Human-readable error message.
    url : str
        The URL whose body failed to decode.
    encoding : str
        The ``Content-Encoding`` header value of the response.
    """

    def __init__(self, url: str, encoding: str) -> None:
        """
        Initialize DecodeError.

        Parameters
        ----------
        url : str
            The URL whose body failed to decode.
        encoding : str
            The declared content encoding.
        """
        self.url = url
        self.encoding = encoding
        super().__init__(f"Failed to decode {encoding or 'unknown'} body from {url}")


class ResolutionError(ChannelPulseError):
    """
    Exception raised when a channel handle cannot be mapped to a channel ID.

    Attributes
    ----------
    message : str
        Human-readable error message.
    handle : str
        The handle that could not be resolved.
    """

    def __init__(self, handle: str, message: str | None = None) -> None:
        """
        Initialize ResolutionError.

        Parameters
        ----------
        handle : str
            The handle that could not be resolved (without ``@``).
        message : str | None, optional
            Override for the default message (default: None).
        """
        self.handle = handle
        super().__init__(message or f"Channel ID not found for handle @{handle}")


class ExtractionError(ChannelPulseError):
    """Raised when embedded page JSON is missing or malformed."""


class ChannelInfoError(ChannelPulseError):
    """Raised when the structured channel-info client cannot answer."""


class AggregationFatal(ChannelPulseError):
    """
    Exception raised when no channel record can be produced.

    Raised by the aggregator when channel ID resolution fails, and by the
    cache when a refresh fails and there is no previous record to fall
    back to.
    """
