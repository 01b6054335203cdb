"""
Locate and parse JSON objects embedded in HTML page source.

YouTube pages carry their initial state as an inline script assignment
(``var ytInitialData = {...};``). The object is not a standalone document,
so it is cut out with a brace-counting scan instead of a regex.
"""

from __future__ import annotations

import json
from typing import Any

from channelpulse.exceptions import ExtractionError

YT_INITIAL_DATA_MARKER = "ytInitialData"


def extract_json_object(text: str, marker: str) -> str | None:
    """
    Extract the first balanced JSON object following ``marker``.

    Scans forward from the first ``{`` after the marker, tracking brace
    depth. Double quotes toggle string mode unless escaped, and braces
    inside strings do not count.

    Parameters
    ----------
    text : str
        Raw HTML source.
    marker : str
        Literal string preceding the object, e.g. ``"ytInitialData"``.

    Returns
    -------
    str | None
        The object text from its opening to its matching closing brace,
        or None if the marker is absent, no ``{`` follows it, or the braces
        never balance.

    Examples
    --------
    >>> extract_json_object('x = {"a":"b}c"};', "x")
    '{"a":"b}c"}'
    """
    marker_index = text.find(marker)
    if marker_index == -1:
        return None

    start = text.find("{", marker_index + len(marker))
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape = False

    for i in range(start, len(text)):
        ch = text[i]

        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]

    return None


def load_embedded_json(text: str, marker: str = YT_INITIAL_DATA_MARKER) -> dict[str, Any]:
    """
    Locate and parse the JSON object following ``marker``.

    Raises
    ------
    ExtractionError
        If no balanced object follows the marker, it is not valid JSON, or
        it is nested deeper than the parser can handle.
    """
    json_str = extract_json_object(text, marker)
    if json_str is None:
        raise ExtractionError(f"No embedded JSON object found after '{marker}'")

    try:
        data = json.loads(json_str)
    except (json.JSONDecodeError, ValueError) as e:
        raise ExtractionError(f"Malformed JSON after '{marker}': {e}") from e
    except RecursionError as e:
        raise ExtractionError(f"JSON after '{marker}' is nested too deeply") from e

    return data
