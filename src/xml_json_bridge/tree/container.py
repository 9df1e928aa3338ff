"""JSON-like containers produced by the converter.

JSONObject is an insertion-ordered mapping whose ``append`` coalesces
repeated keys into a JSONArray, which is how sibling elements sharing a tag
name end up as a list in the converted document.
"""

import json
from typing import Any, Optional


class JSONArray(list):
    """Sequence created when a key is appended more than once."""


class JSONObject(dict):
    """Ordered mapping with repeated-key coalescing.

    Keys keep the order in which they were first seen. Values are plain
    Python scalars, nested JSONObjects or JSONArrays, so the object can be
    handed straight to ``json.dumps``.
    """

    def append(self, key: str, value: Any) -> "JSONObject":
        """Add ``value`` under ``key`` without overwriting an existing value.

        The first value is stored directly. The second turns the slot into a
        JSONArray holding both values, and later values are appended to that
        array.

        Returns:
            This object, so calls can be chained
        """
        if key not in self:
            self[key] = value
            return self

        existing = self[key]
        if isinstance(existing, JSONArray):
            existing.append(value)
        else:
            self[key] = JSONArray([existing, value])
        return self

    @property
    def size(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        return not self

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialise to JSON text."""
        return json.dumps(self, indent=indent, ensure_ascii=False)
