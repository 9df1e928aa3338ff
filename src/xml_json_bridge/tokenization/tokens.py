"""Token types produced by the XML tokenizer."""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """XML token types supported by the tokenizer."""

    LT = auto()         # Tag opening marker: <
    GT = auto()         # Tag closing marker: >
    SLASH = auto()      # Close or self-closing marker: /
    EQ = auto()         # Attribute assignment marker: =
    BANG = auto()       # Declaration, comment or CDATA marker: !
    QUEST = auto()      # Processing instruction marker: ?
    NAME = auto()       # Bare tag name, attribute name or unquoted value
    STRING = auto()     # Quoted attribute value with quotes removed
    TEXT = auto()       # Character content between tags
    META = auto()       # Opaque fragment inside a <!...> declaration


MARKER_TYPES = frozenset({
    TokenType.LT,
    TokenType.GT,
    TokenType.SLASH,
    TokenType.EQ,
    TokenType.BANG,
    TokenType.QUEST,
})

IDENTIFIER_TYPES = frozenset({TokenType.NAME, TokenType.STRING})

# Characters that become marker tokens when they start a structural token
MARKER_CHARACTERS = {
    "<": TokenType.LT,
    ">": TokenType.GT,
    "/": TokenType.SLASH,
    "=": TokenType.EQ,
    "!": TokenType.BANG,
    "?": TokenType.QUEST,
}


@dataclass(frozen=True)
class TokenPosition:
    """Position information for XML tokens."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")


@dataclass(frozen=True)
class Token:
    """Represents a single XML token and where it started."""

    type: TokenType
    value: str
    position: TokenPosition

    @property
    def is_marker(self) -> bool:
        """Check if this token is one of the single-character markers."""
        return self.type in MARKER_TYPES

    @property
    def is_identifier(self) -> bool:
        """Check if this token can name a tag or attribute or carry a value."""
        return self.type in IDENTIFIER_TYPES

    def __str__(self) -> str:
        return self.value
