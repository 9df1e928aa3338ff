"""XML to JSON conversion API with progressive disclosure.

Level 1 is the module-level functions ``to_json_object``, ``to_json`` and
``convert_file``. Level 2 is ``XMLToJSONConverter``, which takes a
``ConverterConfig`` and returns a ``ConversionResult`` with metrics.

Conversion is lossy by design: attributes and child elements share one
namespace of keys, repeated siblings become lists, and an element whose only
entry is its text content collapses to that scalar.
"""

import time
from pathlib import Path
from typing import Any, Optional, Union

from xml_json_bridge.shared import (
    ConversionError,
    ConversionMetrics,
    ConversionResult,
    ConverterConfig,
    InputTooLargeError,
    NestingDepthError,
    get_logger,
)
from xml_json_bridge.tokenization import XMLTokenizer, TokenType
from xml_json_bridge.tree import JSONObject, Scalar, string_to_value

# Key under which text and CDATA content is stored
CONTENT_KEY = "content"

MS_PER_SECOND = 1000


def fold_element(element: JSONObject) -> Any:
    """Reduce a closed element to the value stored at its parent.

    An empty element becomes ``""`` and an element holding nothing but
    ``"content"`` becomes that content value. Anything else is kept whole.
    """
    if element.is_empty():
        return ""
    if element.size == 1 and CONTENT_KEY in element:
        return element[CONTENT_KEY]
    return element


class XMLToJSONConverter:
    """Recursive-descent converter from XML text to a JSONObject tree.

    A converter holds only configuration, so one instance can convert any
    number of documents, including from several threads at once. Every call
    to ``convert`` builds its own tokenizer, output tree and metrics.
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the converter.

        Args:
            config: Converter configuration (defaults to ConverterConfig())
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or ConverterConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xml_converter")

    def convert(self, xml_string: str) -> ConversionResult:
        """Convert an XML document to a JSONObject.

        Every top-level element is merged into a single root object, so
        ``<a>1</a><a>2</a>`` converts to ``{"a": [1, 2]}``.

        Raises:
            XMLSyntaxError: If the document is malformed
            NestingDepthError: If elements nest deeper than
                ``config.max_nesting_depth``
            InputTooLargeError: If the input exceeds
                ``config.max_input_length``
        """
        start_time = time.time()
        max_length = self.config.max_input_length
        if max_length is not None and len(xml_string) > max_length:
            raise InputTooLargeError(len(xml_string), max_length)

        self.logger.debug(
            "Starting XML to JSON conversion",
            extra={
                "content_length": len(xml_string),
                "keep_strings": self.config.keep_strings,
            }
        )

        metrics = ConversionMetrics(characters_processed=len(xml_string))
        root = JSONObject()
        tokenizer = XMLTokenizer(xml_string)
        keep_strings = self.config.keep_strings

        try:
            self._parse_document(tokenizer, root, keep_strings, metrics)
        except ConversionError as e:
            self.logger.warning(
                "XML to JSON conversion failed",
                extra={
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise

        metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
        self.logger.info(
            "XML to JSON conversion completed",
            extra={
                "processing_time_ms": metrics.processing_time_ms,
                "elements_converted": metrics.elements_converted,
                "max_depth_reached": metrics.max_depth_reached,
            }
        )
        return ConversionResult(
            data=root,
            metrics=metrics,
            correlation_id=self.correlation_id
        )

    def to_json_object(self, xml_string: str) -> JSONObject:
        """Convert an XML document and return only the converted tree."""
        return self.convert(xml_string).data

    def convert_file(
        self,
        file_path: Union[str, Path],
        encoding: str = "utf-8"
    ) -> ConversionResult:
        """Read and convert an XML file.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the file is not valid in ``encoding``
            ConversionError: If the content cannot be converted
        """
        path_obj = Path(file_path)
        self.logger.debug(
            "Reading XML file",
            extra={"file_path": str(path_obj), "encoding": encoding}
        )
        return self.convert(path_obj.read_text(encoding=encoding))

    def _scalar(self, text: str, keep_strings: bool) -> Scalar:
        return text if keep_strings else string_to_value(text)

    def _parse_document(
        self,
        tokenizer: XMLTokenizer,
        root: JSONObject,
        keep_strings: bool,
        metrics: ConversionMetrics
    ) -> None:
        try:
            while tokenizer.more() and tokenizer.skip_past("<"):
                self._parse(tokenizer, root, None, keep_strings, 0, metrics)
        except RecursionError:
            # Stack ran out below max_nesting_depth
            raise NestingDepthError(
                metrics.max_depth_reached, position=tokenizer.position()
            ) from None

    def _parse(
        self,
        tokenizer: XMLTokenizer,
        context: JSONObject,
        name: Optional[str],
        keep_strings: bool,
        depth: int,
        metrics: ConversionMetrics
    ) -> bool:
        """Scan the markup that follows a ``<`` and attach it to ``context``.

        Args:
            tokenizer: Tokenizer positioned just after ``<``
            context: Object receiving elements and content found here
            name: Tag whose close tag would end the current element, or None
                at document level
            keep_strings: Keep scalars as strings instead of coercing them
            depth: Nesting level of ``context`` (0 for the document root)
            metrics: Counters for the running conversion

        Returns:
            True only when the close tag for ``name`` was consumed
        """
        token = tokenizer.next_token()

        if token.type is TokenType.BANG:
            self._parse_declaration(tokenizer, context, keep_strings, metrics)
            return False

        if token.type is TokenType.QUEST:
            if not tokenizer.skip_past("?>"):
                raise tokenizer.syntax_error("Unclosed processing instruction")
            metrics.processing_instructions_skipped += 1
            return False

        if token.type is TokenType.SLASH:
            closing = tokenizer.next_token()
            if name is None:
                raise tokenizer.syntax_error(f"Mismatched close tag {closing}")
            if not closing.is_identifier or closing.value != name:
                raise tokenizer.syntax_error(f"Mismatched {name} and {closing}")
            if tokenizer.next_token().type is not TokenType.GT:
                raise tokenizer.syntax_error("Misshaped close tag")
            return True

        if not token.is_identifier:
            raise tokenizer.syntax_error("Misshaped tag")

        # Open tag
        tag_name = token.value
        level = depth + 1
        if level > self.config.max_nesting_depth:
            raise NestingDepthError(
                self.config.max_nesting_depth, tag_name, token.position
            )
        metrics.elements_converted += 1
        metrics.record_depth(level)

        element = JSONObject()
        if self._parse_attributes(tokenizer, element, keep_strings, metrics):
            # Self-closing tag
            context.append(tag_name, "" if element.is_empty() else element)
            return False

        while True:
            content = tokenizer.next_content()
            if content is None:
                raise tokenizer.syntax_error(f"Unclosed tag {tag_name}")
            if content.type is TokenType.TEXT:
                if content.value:
                    element.append(
                        CONTENT_KEY, self._scalar(content.value, keep_strings)
                    )
            elif self._parse(
                tokenizer, element, tag_name, keep_strings, level, metrics
            ):
                context.append(tag_name, fold_element(element))
                return False

    def _parse_attributes(
        self,
        tokenizer: XMLTokenizer,
        element: JSONObject,
        keep_strings: bool,
        metrics: ConversionMetrics
    ) -> bool:
        """Read attributes up to the end of an open tag.

        Returns:
            True for a self-closing tag (``/>``), False when the tag ends
            with ``>`` and content follows
        """
        token = None
        while True:
            if token is None:
                token = tokenizer.next_token()

            if token.is_identifier:
                attribute = token.value
                token = tokenizer.next_token()
                if token.type is TokenType.EQ:
                    value = tokenizer.next_token()
                    if not value.is_identifier:
                        raise tokenizer.syntax_error("Missing value")
                    element.append(attribute, self._scalar(value.value, keep_strings))
                    token = None
                else:
                    # Valueless attribute; the token just read starts the next item
                    element.append(attribute, "")
                metrics.attributes_converted += 1
            elif token.type is TokenType.SLASH:
                if tokenizer.next_token().type is not TokenType.GT:
                    raise tokenizer.syntax_error("Misshaped tag")
                return True
            elif token.type is TokenType.GT:
                return False
            else:
                raise tokenizer.syntax_error("Misshaped tag")

    def _parse_declaration(
        self,
        tokenizer: XMLTokenizer,
        context: JSONObject,
        keep_strings: bool,
        metrics: ConversionMetrics
    ) -> None:
        """Handle ``<!`` markup: a comment, a CDATA section or a declaration."""
        c = tokenizer.next()
        if c == "-":
            second = tokenizer.next()
            if second == "-":
                if not tokenizer.skip_past("-->"):
                    raise tokenizer.syntax_error("Unclosed comment")
                metrics.comments_skipped += 1
                return
            if second:
                tokenizer.back()
        elif c == "[":
            token = tokenizer.next_token()
            if token.is_identifier and token.value == "CDATA" and tokenizer.next() == "[":
                text = tokenizer.next_cdata()
                metrics.cdata_sections += 1
                if text:
                    context.append(CONTENT_KEY, self._scalar(text, keep_strings))
                return
            raise tokenizer.syntax_error("Expected 'CDATA['")

        # Declaration such as <!DOCTYPE ...>; internal subsets nest < and >
        nesting = 1
        while nesting > 0:
            meta = tokenizer.next_meta()
            if meta is None:
                raise tokenizer.syntax_error("Missing '>' after '<!'.")
            if meta.type is TokenType.LT:
                nesting += 1
            elif meta.type is TokenType.GT:
                nesting -= 1
        metrics.declarations_skipped += 1
        self.logger.debug("Skipped markup declaration")


def _resolve_config(
    config: Optional[ConverterConfig],
    keep_strings: bool
) -> ConverterConfig:
    resolved = config or ConverterConfig()
    if keep_strings and not resolved.keep_strings:
        resolved = resolved.override(keep_strings=True)
    return resolved


def to_json_object(
    xml_string: str,
    keep_strings: bool = False,
    config: Optional[ConverterConfig] = None
) -> JSONObject:
    """Convert an XML string to a JSONObject.

    Args:
        xml_string: XML document as text
        keep_strings: Keep every value as a string instead of coercing
            numbers, booleans and null
        config: Optional converter configuration

    Examples:
        >>> to_json_object('<a x="1"/>')
        {'a': {'x': 1}}
        >>> to_json_object('<a>1</a><a>2</a>')
        {'a': [1, 2]}
        >>> to_json_object('<a>5</a>', keep_strings=True)
        {'a': '5'}
    """
    converter = XMLToJSONConverter(_resolve_config(config, keep_strings))
    return converter.convert(xml_string).data


def to_json(
    xml_string: str,
    keep_strings: bool = False,
    indent: Optional[int] = None,
    config: Optional[ConverterConfig] = None
) -> str:
    """Convert an XML string straight to JSON text.

    ``indent`` falls back to ``config.json_indent`` when not given.

    Examples:
        >>> to_json('<a><b>1</b><b>two</b></a>')
        '{"a": {"b": [1, "two"]}}'
    """
    resolved = _resolve_config(config, keep_strings)
    result = XMLToJSONConverter(resolved).convert(xml_string)
    return result.to_json(indent if indent is not None else resolved.json_indent)


def convert_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Read an XML file and convert it.

    Examples:
        >>> result = convert_file("catalog.xml")
        >>> result.metrics.elements_converted
        12
    """
    converter = XMLToJSONConverter(config, correlation_id)
    return converter.convert_file(file_path, encoding=encoding)
