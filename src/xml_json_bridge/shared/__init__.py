"""Shared utilities for XML to JSON conversion.

This module provides the configuration object, exception hierarchy, result
types and logging helpers used across the tokenizer, converter and CLI.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    ConverterConfig,
)
from .errors import (
    ConversionError,
    InputTooLargeError,
    NestingDepthError,
    XMLSyntaxError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    ConversionMetrics,
    ConversionResult,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "ConverterConfig",
    "ConversionError",
    "InputTooLargeError",
    "NestingDepthError",
    "XMLSyntaxError",
    "CorrelationLogger",
    "get_logger",
    "ConversionMetrics",
    "ConversionResult",
]
