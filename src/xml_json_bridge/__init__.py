"""XML JSON Bridge.

Converts XML documents into JSON-compatible trees of dicts, lists and
scalars with a hand-written tokenizer and a recursive-descent converter.

Progressive API Disclosure:
- Level 1: Simple functions - to_json_object(), to_json(), convert_file()
- Level 2: Configured converter - XMLToJSONConverter class
"""

__version__ = "0.1.0"
__author__ = "XML JSON Bridge Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured converter
from .api import XMLToJSONConverter, convert_file, to_json, to_json_object

# Configuration classes for advanced usage
from .shared.config import ConverterConfig

# Errors raised by every API level
from .shared.errors import (
    ConversionError,
    InputTooLargeError,
    NestingDepthError,
    XMLSyntaxError,
)

# Result objects and data structures
from .shared.result import ConversionMetrics, ConversionResult
from .tree import JSONArray, JSONObject

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple conversion functions
    "to_json_object",
    "to_json",
    "convert_file",

    # Level 2: Configured converter
    "XMLToJSONConverter",

    # Result objects and data structures
    "ConversionMetrics",
    "ConversionResult",
    "JSONArray",
    "JSONObject",

    # Configuration
    "ConverterConfig",

    # Errors
    "ConversionError",
    "InputTooLargeError",
    "NestingDepthError",
    "XMLSyntaxError",
]
