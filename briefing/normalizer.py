"""
Narrow raw model output down to the JSON array it is supposed to contain.
"""

import json
import re
from typing import Any, List, Optional

from briefing.errors import ResponseFormatError

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")


def clean_json_string(text: Optional[str]) -> str:
    """
    Return the substring of ``text`` most likely to parse as a JSON array.

    Tries, in order: the interior of a fenced code block, the span from the
    first ``[`` to the last ``]``, then the trimmed text. Empty input gives
    ``"[]"``. Nothing is parsed here.
    """
    if not text:
        return "[]"

    match = _FENCE_RE.search(text)
    if match and match.group(1):
        return match.group(1).strip()

    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end > start:
        return text[start:end + 1]

    return text.strip()


def parse_json_array(text: Optional[str]) -> List[Any]:
    """
    Normalize and parse ``text`` as a JSON array.

    Raises:
        ResponseFormatError: If the text does not parse or is not an array
    """
    cleaned = clean_json_string(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(
            f"Response is not valid JSON: {e.msg} (line {e.lineno}, col {e.colno})",
            raw_text=text or "",
        ) from e

    if not isinstance(data, list):
        raise ResponseFormatError(
            f"Expected a JSON array, got {type(data).__name__}",
            raw_text=text or "",
        )

    return data
