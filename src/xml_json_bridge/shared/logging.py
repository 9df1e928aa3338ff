"""Structured logging utilities for XML to JSON conversion.

Every record emitted through ``get_logger`` carries ``component`` and
``correlation_id`` attributes, so log output from concurrent conversions can
be told apart and filtered by formatter or handler.
"""

import logging
from typing import Any, MutableMapping, Optional, Tuple


class CorrelationLogger(logging.LoggerAdapter):
    """Logger adapter that adds correlation ID and component to each record.

    Per-call ``extra`` values are merged over the correlation fields rather
    than replacing them.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name, defaults to the last part of ``name``
        """
        super().__init__(
            logging.getLogger(name),
            {
                "component": component or name.split(".")[-1],
                "correlation_id": correlation_id,
            }
        )

    @property
    def component(self) -> str:
        return self.extra["component"]

    @property
    def correlation_id(self) -> Optional[str]:
        return self.extra["correlation_id"]

    def process(
        self,
        msg: Any,
        kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
