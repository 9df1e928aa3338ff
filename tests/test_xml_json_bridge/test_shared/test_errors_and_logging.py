"""Tests for exception formatting, result objects and correlation logging."""

import logging

from xml_json_bridge.shared import (
    ConversionError,
    ConversionMetrics,
    ConversionResult,
    InputTooLargeError,
    NestingDepthError,
    XMLSyntaxError,
    get_logger,
)
from xml_json_bridge.tokenization import TokenPosition
from xml_json_bridge.tree import JSONObject


class TestErrors:
    """Test suite for the conversion exception hierarchy."""

    def test_syntax_error_without_position(self):
        """Test that the message stands alone when no position is known."""
        error = XMLSyntaxError("Misshaped tag")
        assert str(error) == "Misshaped tag"
        assert error.position is None
        assert isinstance(error, ConversionError)

    def test_syntax_error_with_position(self):
        """Test the documented message format."""
        error = XMLSyntaxError("Unclosed tag a", TokenPosition(3, 7, 42))
        assert str(error) == "Unclosed tag a at line 3, column 7 (offset 42)"

    def test_nesting_depth_error(self):
        """Test that depth errors are syntax errors naming the tag."""
        error = NestingDepthError(8, "item", TokenPosition(1, 2, 1))
        assert isinstance(error, XMLSyntaxError)
        assert error.max_depth == 8
        assert error.tag_name == "item"
        assert str(error).startswith("Maximum nesting depth 8 exceeded at <item>")

    def test_nesting_depth_error_without_tag(self):
        """Test the message when no tag name is known."""
        error = NestingDepthError(950)
        assert error.tag_name is None
        assert str(error) == "Maximum nesting depth 950 exceeded"

    def test_input_too_large_error(self):
        """Test input size error details."""
        error = InputTooLargeError(200, 100)
        assert isinstance(error, ConversionError)
        assert error.length == 200
        assert "exceeds maximum of 100" in str(error)


class TestResults:
    """Test suite for metrics and result objects."""

    def test_characters_per_second(self):
        """Test derived throughput."""
        metrics = ConversionMetrics(processing_time_ms=500.0, characters_processed=1000)
        assert metrics.characters_per_second == 2000.0
        assert ConversionMetrics().characters_per_second == 0.0

    def test_record_depth_keeps_maximum(self):
        """Test that only the deepest level is kept."""
        metrics = ConversionMetrics()
        metrics.record_depth(3)
        metrics.record_depth(1)
        assert metrics.max_depth_reached == 3

    def test_result_to_json(self):
        """Test result serialisation."""
        result = ConversionResult(data=JSONObject(a=1))
        assert result.to_json() == '{"a": 1}'


class TestCorrelationLogger:
    """Test suite for correlation-aware logging."""

    def test_records_carry_correlation_fields(self, caplog):
        """Test that component and correlation ID are attached to records."""
        logger = get_logger("xml_json_bridge.test", "req-123", "unit")
        with caplog.at_level(logging.INFO, logger="xml_json_bridge.test"):
            logger.info("hello", extra={"size": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-123"
        assert record.size == 3

    def test_component_defaults_to_module_name(self):
        """Test the default component name."""
        assert get_logger("xml_json_bridge.api.converter").component == "converter"
