"""
Precedence-ordered reconciliation of per-source extraction results.

Sources are folded left to right with ``fill_missing``: a field set by an
earlier source is never overwritten, later sources only fill fields that
are still None or empty.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import reduce
from typing import Any

from channelpulse.models.channel import STAT_FIELDS, ExtractionResult

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def fill_missing(base: ExtractionResult, update: ExtractionResult) -> ExtractionResult:
    """
    Return ``base`` with its missing fields taken from ``update``.

    Pure: neither argument is modified. Returns ``base`` itself when
    ``update`` contributes nothing.

    Examples
    --------
    >>> api = ExtractionResult(subscriber_count=500)
    >>> html = ExtractionResult(subscriber_count=600, video_count=12)
    >>> merged = fill_missing(api, html)
    >>> merged.subscriber_count, merged.video_count
    (500, 12)
    """
    filled = {
        name: getattr(update, name)
        for name in STAT_FIELDS
        if _is_missing(getattr(base, name)) and not _is_missing(getattr(update, name))
    }
    if not filled:
        return base
    return base.model_copy(update=filled)


def merge_results(sources: Iterable[tuple[str, ExtractionResult]]) -> ExtractionResult:
    """
    Fold ``(source_name, result)`` pairs into one result, first source wins.

    Parameters
    ----------
    sources : Iterable[tuple[str, ExtractionResult]]
        Results in precedence order, highest first.

    Returns
    -------
    ExtractionResult
        The merged result; empty if ``sources`` is empty.
    """

    def _step(acc: ExtractionResult, pair: tuple[str, ExtractionResult]) -> ExtractionResult:
        source, result = pair
        merged = fill_missing(acc, result)
        if merged is not acc:
            logger.debug(
                "Source %s filled: %s",
                source,
                ", ".join(n for n in STAT_FIELDS if getattr(merged, n) != getattr(acc, n)),
            )
        return merged

    return reduce(_step, sources, ExtractionResult.empty())
