"""Public conversion API for XML to JSON conversion."""

from .converter import (
    CONTENT_KEY,
    XMLToJSONConverter,
    convert_file,
    fold_element,
    to_json,
    to_json_object,
)

__all__ = [
    "CONTENT_KEY",
    "XMLToJSONConverter",
    "convert_file",
    "fold_element",
    "to_json",
    "to_json_object",
]
