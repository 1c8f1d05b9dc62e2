"""
pizza_service - Delivery Zone Service

This package wires the pure pizza_zone core into a process-wide service:
configuration is loaded once from YAML, every check is logged as a
structured JSON event, and results are serializable for the presentation
layer.

Architecture:
- DeliveryZoneService: Main orchestrator
- DeliveryZoneConfig: Configuration management (YAML, frozen dataclasses)
- ZoneCheckResult: Serializable result schema
- StructuredLogger / LogEvent: JSON logging
"""

from pizza_service.config import DeliveryZoneConfig
from pizza_service.schemas import ZoneCheckResult, Timestamp
from pizza_service.service import DeliveryZoneService

__all__ = [
    "DeliveryZoneConfig",
    "ZoneCheckResult",
    "Timestamp",
    "DeliveryZoneService",
]
