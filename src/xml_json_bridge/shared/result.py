"""Result objects for XML to JSON conversion.

This module defines the metrics gathered while a document is converted and
the result object that bundles them with the converted tree.
"""

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from xml_json_bridge.tree.container import JSONObject


@dataclass
class ConversionMetrics:
    """Counters and timing for a single conversion."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    elements_converted: int = 0
    attributes_converted: int = 0
    max_depth_reached: int = 0
    comments_skipped: int = 0
    declarations_skipped: int = 0
    processing_instructions_skipped: int = 0
    cdata_sections: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    def record_depth(self, depth: int) -> None:
        if depth > self.max_depth_reached:
            self.max_depth_reached = depth


@dataclass
class ConversionResult:
    """Converted document together with conversion metrics."""

    data: "JSONObject"
    metrics: ConversionMetrics = field(default_factory=ConversionMetrics)
    correlation_id: Optional[str] = None

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialise the converted document to JSON text."""
        return json.dumps(self.data, indent=indent, ensure_ascii=False)
