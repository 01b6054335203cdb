"""
Extract channel statistics from a channel page's ``ytInitialData``.

Functions
---------
extract_from_html
    Build an ``ExtractionResult`` from one page's HTML source.
extract_from_initial_data
    Same, from already-parsed ``ytInitialData``.
"""

from __future__ import annotations

import logging
from typing import Any

from channelpulse.exceptions import ExtractionError
from channelpulse.models.channel import ExtractionResult
from channelpulse.services.scraping.embedded_json import (
    YT_INITIAL_DATA_MARKER,
    load_embedded_json,
)
from channelpulse.services.scraping.json_search import find_about_meta, find_by_key
from channelpulse.services.scraping.text import extract_text, parse_count

logger = logging.getLogger(__name__)


def last_thumbnail_url(node: Any) -> str | None:
    """
    Return the URL of the last entry in ``node["thumbnails"]``.

    YouTube lists thumbnails smallest first, so the last one is the
    highest resolution.
    """
    if not isinstance(node, dict):
        return None
    thumbnails = node.get("thumbnails")
    if not isinstance(thumbnails, list) or not thumbnails:
        return None
    last = thumbnails[-1]
    if not isinstance(last, dict):
        return None
    url = last.get("url")
    return str(url) if url else None


def extract_from_initial_data(
    data: dict[str, Any], include_views: bool = False
) -> ExtractionResult:
    """
    Pull counts and avatar out of parsed ``ytInitialData``.

    Parameters
    ----------
    data : dict[str, Any]
        Parsed ``ytInitialData`` object.
    include_views : bool, optional
        Also read the view count from the "about" metadata block. Only the
        about page carries it reliably (default: False).

    Returns
    -------
    ExtractionResult
        Whatever could be found; missing fields are None.
    """
    subscriber_text = extract_text(find_by_key(data, "subscriberCountText"))
    video_text = extract_text(
        find_by_key(data, "videosCountText") or find_by_key(data, "videoCountText")
    )

    view_text: str | None = None
    if include_views:
        about_meta = find_about_meta(data)
        if about_meta is not None:
            view_text = extract_text(about_meta.get("viewCountText"))

    return ExtractionResult(
        subscriber_count=parse_count(subscriber_text),
        subscriber_text=subscriber_text,
        video_count=parse_count(video_text),
        view_count=parse_count(view_text),
        view_text=view_text,
        avatar_url=last_thumbnail_url(find_by_key(data, "avatar")),
    )


def extract_from_html(html: str, include_views: bool = False) -> ExtractionResult:
    """
    Extract channel statistics from a channel page's HTML source.

    Never raises: a page without usable ``ytInitialData`` produces an
    empty result.

    Parameters
    ----------
    html : str
        Raw page source.
    include_views : bool, optional
        Read the view count from the "about" block (default: False).

    Returns
    -------
    ExtractionResult
        Extracted fields, or an empty result.
    """
    try:
        data = load_embedded_json(html, YT_INITIAL_DATA_MARKER)
    except ExtractionError as e:
        logger.debug("No usable ytInitialData in page: %s", e)
        return ExtractionResult.empty()

    return extract_from_initial_data(data, include_views=include_views)
