"""Output value model for converted documents."""

from .coercion import Scalar, string_to_value
from .container import JSONArray, JSONObject

__all__ = [
    "Scalar",
    "string_to_value",
    "JSONArray",
    "JSONObject",
]
