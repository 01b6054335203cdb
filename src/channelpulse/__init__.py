"""
channelpulse - YouTube channel statistics aggregator.

Resolves a channel from its handle, merges subscriber, video and view
counts from the YouTube Data API and the channel's own pages, and serves
the result through a short-lived in-memory cache.
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "channelpulse"
__license__ = "AGPL-3.0-or-later"

__all__ = ["__version__", "__author__", "__license__"]
