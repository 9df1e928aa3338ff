"""Scalar coercion for attribute values and text content.

``string_to_value`` is total: anything that is not a recognised literal is
returned unchanged as a string.
"""

import math
import re
from typing import Union

Scalar = Union[str, int, float, bool, None]

# ASCII digits only; leading zeros keep identifiers such as "007" as strings
_INTEGER_PATTERN = re.compile(r"-?(?:0|[1-9][0-9]*)")
_DECIMAL_PATTERN = re.compile(
    r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
)


def string_to_value(text: str) -> Scalar:
    """Convert a raw token to a bool, None, int, float or the original string.

    Examples:
        >>> string_to_value("TRUE")
        True
        >>> string_to_value("42")
        42
        >>> string_to_value("1.5e3")
        1500.0
        >>> string_to_value("007")
        '007'
    """
    if not text:
        return text

    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None

    first = text[0]
    if not (first == "-" or "0" <= first <= "9"):
        return text

    if text == "-0":
        return -0.0
    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)
    if _DECIMAL_PATTERN.fullmatch(text):
        number = float(text)
        if math.isfinite(number):
            return number
    return text
