"""
Display-text nodes and locale-formatted count parsing.

YouTube renders counts as one of three node shapes: a bare string, a
``{"simpleText": ...}`` node, or a ``{"runs": [{"text": ...}, ...]}``
node. ``DisplayText`` models those three shapes; ``extract_text`` turns
any of them into plain text and ``parse_count`` turns that text into an
integer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Union


@dataclass(frozen=True)
class PlainText:
    """A bare string node."""

    text: str


@dataclass(frozen=True)
class SimpleText:
    """A ``{"simpleText": ...}`` node."""

    simple_text: str


@dataclass(frozen=True)
class RunsText:
    """A ``{"runs": [...]}`` node; each run contributes its ``text``."""

    runs: tuple[str, ...]


DisplayText = Union[PlainText, SimpleText, RunsText]


def display_text_from_node(node: Any) -> Optional[DisplayText]:
    """
    Classify a raw JSON node as one of the ``DisplayText`` variants.

    Returns None for empty values and for objects carrying neither a
    non-empty ``simpleText`` nor a ``runs`` list.
    """
    if not node:
        return None
    if isinstance(node, str):
        return PlainText(node)
    if isinstance(node, dict):
        simple = node.get("simpleText")
        if simple:
            return SimpleText(str(simple))
        runs = node.get("runs")
        if isinstance(runs, list):
            return RunsText(
                tuple(
                    str(run.get("text") or "") if isinstance(run, dict) else ""
                    for run in runs
                )
            )
    return None


def display_text_to_str(display: DisplayText) -> str:
    """Render a ``DisplayText`` as plain text."""
    if isinstance(display, PlainText):
        return display.text
    if isinstance(display, SimpleText):
        return display.simple_text
    if isinstance(display, RunsText):
        return "".join(display.runs)
    raise TypeError(f"Unknown display text variant: {type(display).__name__}")


def extract_text(node: Any) -> Optional[str]:
    """
    Convert a string, simple-text or runs node to plain text.

    Examples
    --------
    >>> extract_text({"runs": [{"text": "1,234"}, {"text": " videos"}]})
    '1,234 videos'
    >>> extract_text({"thumbnails": []}) is None
    True
    """
    display = display_text_from_node(node)
    if display is None:
        return None
    return display_text_to_str(display)


_NUMBER = r"(\d+(?:\.\d+)?)"

# First match wins. Each rule requires a number directly before its marker.
_MULTIPLIER_RULES: list[tuple[re.Pattern[str], int]] = [
    (re.compile(_NUMBER + r"\s*億"), 100_000_000),
    (re.compile(_NUMBER + r"\s*万"), 10_000),
    (re.compile(_NUMBER + r"\s*[Kk](?![A-Za-z])"), 1_000),
    (re.compile(_NUMBER + r"\s*[Mm](?![A-Za-z])"), 1_000_000),
    (re.compile(_NUMBER + r"\s*[Bb](?![A-Za-z])"), 1_000_000_000),
]


def parse_count(text: Optional[str]) -> Optional[int]:
    """
    Parse locale-formatted count text into an integer.

    Thousands-separator commas are removed first. Japanese magnitude
    markers (``億`` = 10^8, ``万`` = 10^4) take precedence over the
    K/M/B suffixes; fractional prefixes are rounded half-up. Text with no
    multiplier is reduced to its digits.

    Parameters
    ----------
    text : str | None
        Count text, e.g. ``"1,234"``, ``"12.3万"``, ``"2.1M subscribers"``.

    Returns
    -------
    int | None
        Parsed count, or None if the text is empty or holds no digits.

    Examples
    --------
    >>> parse_count("1,234")
    1234
    >>> parse_count("チャンネル登録者数 12.3万人")
    123000
    >>> parse_count("1.5億")
    150000000
    >>> parse_count("2.1M subscribers")
    2100000
    >>> parse_count("No videos") is None
    True
    """
    if not text:
        return None

    normalized = text.replace(",", "").strip()

    for pattern, multiplier in _MULTIPLIER_RULES:
        match = pattern.search(normalized)
        if match:
            value = Decimal(match.group(1)) * multiplier
            return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    digits = re.sub(r"\D", "", normalized)
    return int(digits) if digits else None
