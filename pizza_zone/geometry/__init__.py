"""
Geometry Layer
==============

Bounded Context: Pure geographic shapes and spatial queries.

Responsibilities:
- Point and polygon representation (immutable)
- Point-in-polygon tests (ray casting)
- Great-circle distance (Haversine)
- NO state, NO configuration loading, NO logging

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
- Zero side effects
"""

from pizza_zone.geometry.shapes import GeoPoint, DeliveryPolygon, LatLng
from pizza_zone.geometry.distance import EARTH_RADIUS_KM, haversine_km, distance_km

__all__ = [
    "GeoPoint",
    "DeliveryPolygon",
    "LatLng",
    "EARTH_RADIUS_KM",
    "haversine_km",
    "distance_km",
]
