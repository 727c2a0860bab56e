"""Minimal JSON encoder for submission records.

Only a closed set of value types is accepted: ``str``, ``int``, ``float``,
``bool``, ``None``, ``dict`` with string keys and ``list``/``tuple``. Anything
else raises :class:`TypeError` instead of being stringified.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Union

JsonValue = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
}


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if ord(char) < 0x20:
        return f"\\u{ord(char):04x}"
    return char


def encode_string(text: str) -> str:
    """Quote *text* as a JSON string literal."""
    return '"' + "".join(_escape_char(c) for c in text) + '"'


def encode_json(value: JsonValue) -> str:
    """Serialize *value* compactly, keeping mapping and sequence order."""
    if value is None:
        return "null"
    # bool is a subclass of int and must be handled first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError(f"Out of range float value: {value!r}")
        return repr(value)
    if isinstance(value, str):
        return encode_string(value)
    if isinstance(value, dict):
        items = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, not {type(key).__name__}")
            items.append(f"{encode_string(key)}:{encode_json(item)}")
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(encode_json(item) for item in value) + "]"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


__all__ = ["JsonValue", "encode_json", "encode_string"]
