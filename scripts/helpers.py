import re
import json
from typing import Any

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def extract_json_array(raw: str | list) -> list:
    """
    Pull the first `[` … last `]` span out of a free-text model reply and
    parse it. Raises ValueError when there is no array or it does not parse.
    """
    if isinstance(raw, list):
        return raw
    match = _ARRAY_RE.search(raw or "")
    if not match:
        raise ValueError("No JSON array found in Gemini response")

    data = json.loads(match.group(0))  # json.JSONDecodeError is a ValueError
    if not isinstance(data, list):
        raise ValueError("Gemini response is not a JSON array")
    return data


def parse_int(value: Any) -> int:
    """
    Lenient integer parse: leading digits win, anything else is 0.

    "320" → 320, "12g" → 12, "7.9" → 7, 18.6 → 18, "abc" / None → 0
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else 0
