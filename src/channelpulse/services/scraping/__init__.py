"""
Channel page scraping.

Fetches YouTube channel pages and extracts statistics from the
``ytInitialData`` object embedded in their source.

Modules
-------
fetcher
    HTTP document fetcher with content-encoding handling
embedded_json
    Brace-counting locator for inline JSON objects
json_search
    Key and shape search over parsed JSON trees
text
    Display-text nodes and locale-aware count parsing
page_extractor
    Per-page statistics extraction
"""

from channelpulse.services.scraping.embedded_json import (
    YT_INITIAL_DATA_MARKER,
    extract_json_object,
    load_embedded_json,
)
from channelpulse.services.scraping.fetcher import DocumentFetcher
from channelpulse.services.scraping.json_search import (
    JsonKind,
    find_about_meta,
    find_by_key,
    json_kind,
    walk,
)
from channelpulse.services.scraping.page_extractor import (
    extract_from_html,
    extract_from_initial_data,
)
from channelpulse.services.scraping.text import (
    DisplayText,
    PlainText,
    RunsText,
    SimpleText,
    extract_text,
    parse_count,
)

__all__ = [
    "YT_INITIAL_DATA_MARKER",
    "DisplayText",
    "DocumentFetcher",
    "JsonKind",
    "PlainText",
    "RunsText",
    "SimpleText",
    "extract_from_html",
    "extract_from_initial_data",
    "extract_json_object",
    "extract_text",
    "find_about_meta",
    "find_by_key",
    "json_kind",
    "load_embedded_json",
    "parse_count",
    "walk",
]
