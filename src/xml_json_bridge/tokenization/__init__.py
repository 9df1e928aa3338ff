"""XML tokenization layer.

Provides the pull tokenizer that turns decoded text into marker, name,
string and text tokens for the converter.
"""

from .tokenizer import ENTITIES, XMLTokenizer, unescape_entity
from .tokens import (
    IDENTIFIER_TYPES,
    MARKER_TYPES,
    Token,
    TokenPosition,
    TokenType,
)

__all__ = [
    "ENTITIES",
    "XMLTokenizer",
    "unescape_entity",
    "IDENTIFIER_TYPES",
    "MARKER_TYPES",
    "Token",
    "TokenPosition",
    "TokenType",
]
