"""
Structured JSON Logger
======================

Bounded Context: Observability Infrastructure

Design:
- StructuredLogger attaches event/component/metadata to the LogRecord
- JSONFormatter renders any record as one JSON object per line, so plain
  module loggers share the same output when routed through it
- Thread-safe (uses standard logging module)
- Type-safe events (LogEvent enum)

Output:
    {
        "timestamp": "2026-10-19T08:30:45.123456+00:00",
        "level": "INFO",
        "component": "zone_service",
        "event": "zone.evaluated",
        "message": "Point inside delivery zone",
        "metadata": {"zone_id": "ub_central", "distance_km": 0.42}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    Logger that tags every record with a typed event and metadata.

    Attributes:
        component: Component name (e.g., "zone_service")
        logger: Underlying Python logger instance

    Example:
        >>> logger = StructuredLogger("zone_service")
        >>> logger.info(
        ...     event=LogEvent.ZONE_CONFIG_LOADED,
        ...     message="Loaded delivery zone",
        ...     metadata={'zone_id': 'ub_central'}
        ... )
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None,
        stream_handler: bool = True,
    ):
        """
        Args:
            component: Component identifier
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: pizza_service.<component>)
            stream_handler: Attach a stderr JSON handler. Pass False when the
                root logger is already configured (CLI).
        """
        self.component = component
        self.logger = logging.getLogger(logger_name or f"pizza_service.{component}")
        self.logger.setLevel(level)

        if stream_handler and not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        self.logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={
                'component': self.component,
                'event': event.value,
                'metadata': metadata or {},
            },
        )

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        self._log(logging.INFO, event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Example:
            >>> logger.warning(
            ...     event=LogEvent.LOCATION_UNAVAILABLE,
            ...     message="No location source produced a sample",
            ...     metadata={'sources': ['gps', 'district_lookup']}
            ... )
        """
        self._log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception that caused the error, rendered as
                {"type", "message"} (no traceback)
        """
        self._log(logging.ERROR, event, message, metadata, exc_info)


class JSONFormatter(logging.Formatter):
    """
    Render a LogRecord as a single JSON line.

    Records from StructuredLogger carry component/event/metadata; records from
    plain loggers fall back to the logger name and a null event.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', record.name),
            'event': getattr(record, 'event', None),
            'message': record.getMessage(),
        }

        metadata = getattr(record, 'metadata', None)
        if metadata:
            entry['metadata'] = metadata

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, _ = record.exc_info
            entry['exception'] = {'type': exc_type.__name__, 'message': str(exc)}

        return json.dumps(entry, ensure_ascii=False, default=str)


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Example:
        >>> logger = create_logger("zone_service", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
