"""Configuration classes for XML to JSON conversion.

This module provides the immutable configuration object that controls scalar
coercion, resource limits and output formatting for the converter and CLI.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

# One interpreter frame per nesting level, below CPython's default recursion limit
DEFAULT_MAX_NESTING_DEPTH = 512
UNTRUSTED_MAX_NESTING_DEPTH = 64
UNTRUSTED_MAX_INPUT_LENGTH = 10 * 1024 * 1024

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ConverterConfig:
    """Configuration for the XML to JSON converter.

    Thread-safe due to frozen dataclass implementation, so a single instance
    can be shared by converters running on different threads.

    Attributes:
        keep_strings: Keep attribute values and text content as strings
            instead of coercing them to numbers, booleans or null.
        max_nesting_depth: Deepest element nesting accepted before the
            conversion is aborted with NestingDepthError.
        max_input_length: Optional upper bound on the number of input
            characters.
        json_indent: Indentation used when serialising results to JSON text.
        logging_level: Level applied by the CLI when configuring logging.
    """

    keep_strings: bool = False
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_input_length: Optional[int] = None
    json_indent: Optional[int] = None
    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate converter configuration."""
        if self.max_nesting_depth <= 0:
            raise ConfigValidationError(
                "max_nesting_depth must be > 0",
                field_name="max_nesting_depth"
            )
        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ConfigValidationError(
                "max_input_length must be > 0 or None",
                field_name="max_input_length"
            )
        if self.json_indent is not None and self.json_indent < 0:
            raise ConfigValidationError(
                "json_indent must be >= 0 or None",
                field_name="json_indent"
            )
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=VALID_LOGGING_LEVELS
            )

    def override(self, **kwargs: Any) -> "ConverterConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ConverterConfig()
            >>> config.override(keep_strings=True).keep_strings
            True
        """
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Create configuration from dictionary.

        Raises:
            ConfigValidationError: If ``data`` contains unknown keys or invalid
                values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known)
            )
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "ConverterConfig":
        """Create configuration from JSON string."""
        data = json.loads(json_str)
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ConverterConfig":
        """Create the default configuration with scalar coercion enabled."""
        return cls()

    @classmethod
    def preserve_strings(cls) -> "ConverterConfig":
        """Create configuration that keeps every scalar as a string."""
        return cls(keep_strings=True)

    @classmethod
    def untrusted_input(cls) -> "ConverterConfig":
        """Create configuration with tight limits for documents from unknown sources."""
        return cls(
            max_nesting_depth=UNTRUSTED_MAX_NESTING_DEPTH,
            max_input_length=UNTRUSTED_MAX_INPUT_LENGTH
        )
