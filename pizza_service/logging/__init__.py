"""
Structured Logging for the Delivery Zone Service
================================================

Bounded Context: Observability

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: Event-tagged logger
    JSONFormatter: One JSON object per record
    create_logger: Factory function

Example:
    >>> from pizza_service.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="zone_service")
    >>> logger.info(
    ...     event=LogEvent.ZONE_EVALUATED,
    ...     message="Point inside delivery zone",
    ...     metadata={'distance_km': 0.42}
    ... )
"""

from .events import LogEvent
from .structured import JSONFormatter, StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'JSONFormatter',
    'StructuredLogger',
    'create_logger',
]
