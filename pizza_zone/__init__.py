"""
Pizza Delivery Zone
===================

Bounded Context: Delivery-zone geolocation check for the storefront.

Design Philosophy:
- Separation of Concerns: Geometry, Evaluation, Location separated
- Pure core: no persistence, no network, no UI
- Configuration is injected (polygon, restaurant, time table), never global
- Fail-fast: invalid configuration cannot be constructed

Architecture:

    pizza_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # GeoPoint, DeliveryPolygon (ray casting)
    │   └── distance.py    # Haversine distance
    │
    ├── evaluation/        # Verdicts and estimates (stateless)
    │   ├── evaluator.py   # ZoneEvaluator, ZoneVerdict
    │   └── eta.py         # DeliveryTimeTable, DeliveryEstimate
    │
    ├── location/          # Integration layer (location sources)
    │   ├── sources.py     # LocationSample, source adapters
    │   └── resolver.py    # LocationResolver (prioritized fallback)
    │
    └── errors.py          # ZoneConfigError, ZoneInputError, ...

Usage:

    # 1. Create geometry (immutable)
    from pizza_zone import GeoPoint, DeliveryPolygon, ZoneEvaluator

    restaurant = GeoPoint(lat=47.9184, lng=106.9177)
    polygon = DeliveryPolygon(vertices=[
        (47.9284, 106.9277),
        (47.9284, 106.9077),
        (47.9084, 106.9077),
        (47.9084, 106.9277),
    ])

    # 2. Evaluate (stateless)
    evaluator = ZoneEvaluator(polygon, restaurant)
    verdict = evaluator.evaluate(GeoPoint(lat=47.92, lng=106.915))

    # 3. Estimate delivery time (configurable table)
    from pizza_zone import estimated_delivery_minutes

    estimate = estimated_delivery_minutes(verdict.distance_km)
    str(estimate)   # "15-20"
"""

# Errors
from pizza_zone.errors import ZoneConfigError, ZoneInputError, LocationUnavailableError

# Geometry Layer (immutable, stateless)
from pizza_zone.geometry.shapes import GeoPoint, DeliveryPolygon
from pizza_zone.geometry.distance import EARTH_RADIUS_KM, distance_km

# Evaluation Layer (stateless)
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

# Location Layer (integration)
from pizza_zone.location.sources import (
    SourceKind,
    LocationSample,
    StaticLocationSource,
    CallableLocationSource,
    DistrictLookupSource,
)
from pizza_zone.location.resolver import LocationResolver, Resolution

__all__ = [
    # Errors
    "ZoneConfigError",
    "ZoneInputError",
    "LocationUnavailableError",
    # Geometry
    "GeoPoint",
    "DeliveryPolygon",
    "EARTH_RADIUS_KM",
    "distance_km",
    # Evaluation
    "ZoneVerdict",
    "ZoneEvaluator",
    "is_point_in_polygon",
    "evaluate",
    "DeliveryEstimate",
    "DeliveryTimeBucket",
    "DeliveryTimeTable",
    "DEFAULT_TIME_TABLE",
    "estimated_delivery_minutes",
    # Location
    "SourceKind",
    "LocationSample",
    "StaticLocationSource",
    "CallableLocationSource",
    "DistrictLookupSource",
    "LocationResolver",
    "Resolution",
]

__version__ = "1.0.0"
