"""Character-stream XML tokenizer.

This module implements the scanner that feeds the XML to JSON converter. The
converter pulls one token at a time and picks the scanning mode by calling a
different entry point:

- ``next_token`` for structural tokens inside a tag,
- ``next_content`` for text between tags,
- ``next_meta`` for the body of a ``<!...>`` declaration,
- ``next_cdata`` for the raw body of a CDATA section.

Only ``next``/``back`` step single characters, and at most one character can
be pushed back at a time.
"""

from typing import List, Optional

from xml_json_bridge.shared.errors import XMLSyntaxError

from .tokens import MARKER_CHARACTERS, Token, TokenPosition, TokenType

# Predefined XML entities decoded inside text and quoted values
ENTITIES = {
    "amp": "&",
    "apos": "'",
    "gt": ">",
    "lt": "<",
    "quot": '"',
}

QUOTE_CHARACTERS = frozenset("\"'")

# Characters that end a bare name and are left for the next token
NAME_TERMINATORS = frozenset(">/=!?[]")

# Characters that may never appear inside a bare name
BAD_NAME_CHARACTERS = frozenset("<\"'")

# Characters that end an opaque run inside a declaration
META_TERMINATORS = frozenset("<>/=!?\"'")

CDATA_TERMINATOR = "]]>"
# Code points allowed in an XML document; anything else, surrogates included,
# is left as the literal reference
XML_CHAR_RANGES = (
    (0x9, 0xA),
    (0xD, 0xD),
    (0x20, 0xD7FF),
    (0xE000, 0xFFFD),
    (0x10000, 0x10FFFF),
)


class XMLTokenizer:
    """Pull tokenizer over an in-memory XML document.

    The tokenizer lives for exactly one document scan. Line and column are
    tracked incrementally so that every token and every XMLSyntaxError can
    report where it happened without rescanning the input.
    """

    def __init__(self, source: str) -> None:
        """Initialize the tokenizer.

        Args:
            source: Complete XML document as decoded text
        """
        self.source = source
        self.length = len(source)
        self.index = 0
        self._line = 1
        self._line_start = 0
        # One-slot pushback: set after a successful next(), cleared by back()
        self._can_back = False

    # Character stepping

    def more(self) -> bool:
        """Check whether unconsumed input remains."""
        return self.index < self.length

    def next(self) -> str:
        """Consume and return the next character, or ``""`` at end of input."""
        if self.index >= self.length:
            self._can_back = False
            return ""
        c = self.source[self.index]
        self.index += 1
        if c == "\n":
            self._line += 1
            self._line_start = self.index
        self._can_back = True
        return c

    def back(self) -> None:
        """Push the most recently read character back onto the input.

        Raises:
            XMLSyntaxError: If nothing was read since the last pushback
        """
        if not self._can_back:
            raise self.syntax_error("Stepping back two steps is not supported")
        self._can_back = False
        self.index -= 1
        if self.source[self.index] == "\n":
            self._line -= 1
            self._line_start = self.source.rfind("\n", 0, self.index) + 1

    def skip_past(self, literal: str) -> bool:
        """Advance past the next occurrence of ``literal``.

        Returns:
            True if the literal was found; otherwise the input is exhausted
            and False is returned
        """
        found = self.source.find(literal, self.index)
        if found < 0:
            self._advance_to(self.length)
            return False
        self._advance_to(found + len(literal))
        return True

    def _advance_to(self, new_index: int) -> None:
        newlines = self.source.count("\n", self.index, new_index)
        if newlines:
            self._line += newlines
            self._line_start = self.source.rfind("\n", self.index, new_index) + 1
        self.index = new_index
        self._can_back = False

    def _skip_whitespace(self) -> str:
        c = self.next()
        while c and c.isspace():
            c = self.next()
        return c

    # Positions and errors

    def position(self) -> TokenPosition:
        """Get the position of the next unread character."""
        return TokenPosition(
            self._line, self.index - self._line_start + 1, self.index
        )

    def _last_position(self) -> TokenPosition:
        # Position of the character just read; never called after a newline
        return TokenPosition(
            self._line, self.index - self._line_start, self.index - 1
        )

    def syntax_error(self, message: str) -> XMLSyntaxError:
        """Build an XMLSyntaxError located at the current position."""
        return XMLSyntaxError(message, self.position())

    # Token scanning

    def next_token(self) -> Token:
        """Scan the next structural token inside a tag.

        Whitespace is skipped. The result is a marker, a quoted STRING or a
        bare NAME.

        Raises:
            XMLSyntaxError: At end of input, on a stray ``<``, on an
                unterminated quoted string or on a bad character in a name
        """
        c = self._skip_whitespace()
        if not c:
            raise self.syntax_error("Misshaped element")
        start = self._last_position()

        if c == "<":
            raise self.syntax_error("Misplaced '<'")
        marker = MARKER_CHARACTERS.get(c)
        if marker is not None:
            return Token(marker, c, start)
        if c in QUOTE_CHARACTERS:
            return Token(TokenType.STRING, self._read_quoted(c), start)
        return Token(TokenType.NAME, self._read_name(c), start)

    def _read_quoted(self, quote: str) -> str:
        parts: List[str] = []
        while True:
            c = self.next()
            if not c:
                raise self.syntax_error("Unterminated string")
            if c == quote:
                return "".join(parts)
            if c == "&":
                parts.append(self.next_entity(c))
            else:
                parts.append(c)

    def _read_name(self, first: str) -> str:
        parts = [first]
        while True:
            c = self.next()
            if not c or c.isspace():
                return "".join(parts)
            if c in NAME_TERMINATORS:
                self.back()
                return "".join(parts)
            if c in BAD_NAME_CHARACTERS:
                raise self.syntax_error("Bad character in a name")
            parts.append(c)

    def next_entity(self, ampersand: str) -> str:
        """Decode an entity reference whose ``&`` has just been consumed.

        Predefined entities and numeric character references are replaced;
        any other well-terminated reference is returned verbatim.

        Raises:
            XMLSyntaxError: If the reference is not terminated by ``;``
        """
        parts: List[str] = []
        while True:
            c = self.next()
            if c and (c.isalnum() or c == "#"):
                parts.append(c)
            elif c == ";":
                break
            else:
                raise self.syntax_error(
                    f"Missing ';' in XML entity: {ampersand}{''.join(parts)}"
                )
        return unescape_entity("".join(parts))

    def next_meta(self) -> Optional[Token]:
        """Scan the next token inside a ``<!...>`` declaration body.

        Markers are returned as marker tokens so the caller can balance
        ``<`` against ``>``; everything else is an opaque META token.

        Returns:
            The next token, or None at end of input
        """
        c = self._skip_whitespace()
        if not c:
            return None
        start = self._last_position()

        marker = MARKER_CHARACTERS.get(c)
        if marker is not None:
            return Token(marker, c, start)
        if c in QUOTE_CHARACTERS:
            end = self.source.find(c, self.index)
            if end < 0:
                self._advance_to(self.length)
                return None
            value = self.source[self.index:end]
            self._advance_to(end + 1)
            return Token(TokenType.META, value, start)

        parts = [c]
        while True:
            c = self.next()
            if not c or c.isspace():
                break
            if c in META_TERMINATORS:
                self.back()
                break
            parts.append(c)
        return Token(TokenType.META, "".join(parts), start)

    def next_content(self) -> Optional[Token]:
        """Scan text content up to the next ``<``.

        Returns:
            An LT marker if positioned on ``<``, a TEXT token with entities
            decoded and surrounding whitespace trimmed otherwise, or None at
            end of input
        """
        c = self._skip_whitespace()
        if not c:
            return None
        start = self._last_position()
        if c == "<":
            return Token(TokenType.LT, c, start)

        parts: List[str] = []
        while c and c != "<":
            if c == "&":
                parts.append(self.next_entity(c))
            else:
                parts.append(c)
            c = self.next()
        if c == "<":
            self.back()
        return Token(TokenType.TEXT, "".join(parts).strip(), start)

    def next_cdata(self) -> str:
        """Capture raw text up to ``]]>`` and consume the terminator.

        Raises:
            XMLSyntaxError: If the section is never terminated
        """
        end = self.source.find(CDATA_TERMINATOR, self.index)
        if end < 0:
            raise self.syntax_error("Unclosed CDATA")
        value = self.source[self.index:end]
        self._advance_to(end + len(CDATA_TERMINATOR))
        return value


def unescape_entity(name: str) -> str:
    """Resolve the body of an entity reference (the part between & and ;)."""
    if name.startswith("#"):
        try:
            if name[1:2] in ("x", "X"):
                code_point = int(name[2:], 16)
            else:
                code_point = int(name[1:], 10)
        except ValueError:
            return f"&{name};"
        if any(low <= code_point <= high for low, high in XML_CHAR_RANGES):
            return chr(code_point)
        return f"&{name};"
    return ENTITIES.get(name, f"&{name};")
