"""Exception types raised during XML to JSON conversion.

All conversion failures derive from ConversionError. Malformed markup is
reported as XMLSyntaxError, which carries the position where the tokenizer
stopped so callers can point at the offending input.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from xml_json_bridge.tokenization.tokens import TokenPosition


class ConversionError(Exception):
    """Base exception for XML to JSON conversion failures."""


class XMLSyntaxError(ConversionError):
    """Raised when the input is not well-formed enough to convert.

    The string form is ``"<message> at line L, column C (offset O)"`` when a
    position is known and just the message otherwise.
    """

    def __init__(self, message: str, position: Optional["TokenPosition"] = None):
        self.message = message
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        if self.position is None:
            return self.message
        return (
            f"{self.message} at line {self.position.line}, "
            f"column {self.position.column} (offset {self.position.offset})"
        )


class NestingDepthError(XMLSyntaxError):
    """Raised when elements nest deeper than the configured maximum.

    ``tag_name`` is None when the interpreter stack ran out before the
    configured maximum was reached; ``max_depth`` is then the deepest level
    actually converted.
    """

    def __init__(
        self,
        max_depth: int,
        tag_name: Optional[str] = None,
        position: Optional["TokenPosition"] = None
    ):
        self.max_depth = max_depth
        self.tag_name = tag_name
        message = f"Maximum nesting depth {max_depth} exceeded"
        if tag_name is not None:
            message += f" at <{tag_name}>"
        super().__init__(message, position)


class InputTooLargeError(ConversionError):
    """Raised when the input exceeds the configured maximum length."""

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Input length {length} exceeds maximum of {max_length} characters"
        )
