"""
Zone Evaluator Module
=====================

Stateless evaluation logic - applies delivery geometry to a point.

Design:
- Pure functions (no state)
- Configuration (polygon, restaurant) injected, never module globals
- Returns immutable ZoneVerdict
- Thread-safe (no mutations)
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Union

from pizza_zone.geometry.shapes import DeliveryPolygon, GeoPoint, LatLng
from pizza_zone.geometry.distance import distance_km, haversine_km


@dataclass(frozen=True)
class ZoneVerdict:
    """
    Result of evaluating one point.

    Attributes:
        in_zone: True if the point lies inside the delivery polygon
        distance_km: Great-circle distance to the restaurant
    """

    in_zone: bool
    distance_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {'in_zone': self.in_zone, 'distance_km': self.distance_km}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ZoneVerdict':
        try:
            return cls(in_zone=bool(data['in_zone']), distance_km=float(data['distance_km']))
        except KeyError as e:
            raise ValueError(f"Missing required ZoneVerdict field: {e}")


def is_point_in_polygon(point: GeoPoint, polygon: DeliveryPolygon) -> bool:
    """Ray-casting containment test (see DeliveryPolygon.contains_point)."""
    return polygon.contains_point(point)


def evaluate(point: GeoPoint, polygon: DeliveryPolygon, restaurant: GeoPoint) -> ZoneVerdict:
    """
    Evaluate a point against a delivery polygon and restaurant location.

    Args:
        point: Customer location
        polygon: Delivery boundary
        restaurant: Distance origin

    Returns:
        ZoneVerdict with containment and distance
    """
    return ZoneVerdict(
        in_zone=is_point_in_polygon(point, polygon),
        distance_km=distance_km(point, restaurant),
    )


class ZoneEvaluator:
    """
    Evaluator bound to one delivery zone configuration.

    Holds only immutable configuration, so one instance can serve any number
    of concurrent callers.

    Usage:
        evaluator = ZoneEvaluator(polygon, restaurant)
        verdict = evaluator.evaluate(GeoPoint(47.92, 106.91))
        verdicts = evaluator.evaluate_many([(47.92, 106.91), (48.5, 108.0)])
    """

    def __init__(self, polygon: DeliveryPolygon, restaurant: GeoPoint):
        self.polygon = polygon
        self.restaurant = restaurant

    def evaluate(self, point: GeoPoint) -> ZoneVerdict:
        return evaluate(point, self.polygon, self.restaurant)

    def evaluate_many(self, points: Sequence[Union[GeoPoint, LatLng]]) -> List[ZoneVerdict]:
        """
        Evaluate many points in one vectorized pass.

        Args:
            points: GeoPoints or (lat, lng) pairs

        Returns:
            One ZoneVerdict per point, in input order

        Raises:
            ZoneInputError: If any point is out of range
        """
        if len(points) == 0:
            return []

        validated = [p if isinstance(p, GeoPoint) else GeoPoint.from_pair(p) for p in points]
        coords = np.array([p.as_tuple() for p in validated], dtype=np.float64)

        mask = self.polygon.contains_points(coords)
        distances = haversine_km(
            coords[:, 0], coords[:, 1], self.restaurant.lat, self.restaurant.lng
        )

        return [
            ZoneVerdict(in_zone=bool(inside), distance_km=float(dist))
            for inside, dist in zip(mask, distances)
        ]
