"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)
- Searchable in log aggregators

Event Naming Convention:
    <component>.<category>.<action>

    component: zone, location, error
    category: config, source, address
    action: loaded, failed, resolved

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, metadata.in_zone
    | filter event = "zone.evaluated"
    | stats count() by metadata.in_zone
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - zone.*: Configuration and evaluation
    - location.*: Location source resolution
    - error.*: Error conditions
    """

    # ========== Zone Events ==========
    ZONE_CONFIG_LOADED = "zone.config.loaded"
    """Delivery zone configuration loaded and validated."""

    ZONE_EVALUATED = "zone.evaluated"
    """A point was evaluated against the delivery zone."""

    ZONE_BATCH_EVALUATED = "zone.batch.evaluated"
    """A batch of points was evaluated in one pass."""

    # ========== Location Events ==========
    LOCATION_RESOLVED = "location.resolved"
    """A location source produced a usable sample."""

    LOCATION_SOURCE_FAILED = "location.source.failed"
    """A location source had no usable sample; next source is tried."""

    LOCATION_UNAVAILABLE = "location.unavailable"
    """Every location source failed."""

    ADDRESS_NOT_FOUND = "location.address.not_found"
    """Manual address did not match any configured district."""

    # ========== Error Events ==========
    CONFIG_ERROR = "error.config"
    """Configuration failed validation."""

    INPUT_REJECTED = "error.input_rejected"
    """Query input violated the caller contract."""
