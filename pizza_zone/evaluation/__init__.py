"""
Evaluation Layer
================

Bounded Context: Delivery zone verdicts and delivery time estimates.

Responsibilities:
- Containment + distance verdict for a point (ZoneEvaluator)
- Distance to delivery-time range (DeliveryTimeTable)
- NO location lookup, NO configuration files, NO logging
"""

from pizza_zone.evaluation.evaluator import (
    ZoneVerdict,
    ZoneEvaluator,
    is_point_in_polygon,
    evaluate,
)
from pizza_zone.evaluation.eta import (
    DeliveryEstimate,
    DeliveryTimeBucket,
    DeliveryTimeTable,
    DEFAULT_TIME_TABLE,
    estimated_delivery_minutes,
)

__all__ = [
    "ZoneVerdict",
    "ZoneEvaluator",
    "is_point_in_polygon",
    "evaluate",
    "DeliveryEstimate",
    "DeliveryTimeBucket",
    "DeliveryTimeTable",
    "DEFAULT_TIME_TABLE",
    "estimated_delivery_minutes",
]
