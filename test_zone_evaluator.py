"""
Test Zone Evaluator
===================

Haversine distance, evaluate() composition, and the end-to-end
Ulaanbaatar scenario.

Usage:
    pytest test_zone_evaluator.py
"""

import math

import numpy as np
import pytest

from pizza_zone import (
    EARTH_RADIUS_KM,
    DeliveryPolygon,
    GeoPoint,
    ZoneEvaluator,
    ZoneInputError,
    ZoneVerdict,
    distance_km,
    evaluate,
    is_point_in_polygon,
)
from pizza_zone.geometry import haversine_km


RESTAURANT = GeoPoint(lat=47.9184, lng=106.9177)


@pytest.fixture
def ub_polygon():
    """Square with 0.01 degree half-width around the restaurant."""
    half = 0.01
    return DeliveryPolygon(vertices=[
        (RESTAURANT.lat + half, RESTAURANT.lng + half),
        (RESTAURANT.lat + half, RESTAURANT.lng - half),
        (RESTAURANT.lat - half, RESTAURANT.lng - half),
        (RESTAURANT.lat - half, RESTAURANT.lng + half),
    ])


@pytest.fixture
def evaluator(ub_polygon):
    return ZoneEvaluator(ub_polygon, RESTAURANT)


# ─────────────────────────────────────────────────────────────────────────────
# Distance
# ─────────────────────────────────────────────────────────────────────────────

def test_earth_radius():
    assert EARTH_RADIUS_KM == 6371.0


def test_distance_identity():
    assert distance_km(RESTAURANT, RESTAURANT) == 0.0


@pytest.mark.parametrize(
    ("a", "b"),
    [
        ((47.9184, 106.9177), (47.9284, 106.9077)),
        ((0.0, 0.0), (10.0, 10.0)),
        ((-33.9249, 18.4241), (51.5072, -0.1276)),
        ((89.9, 0.0), (-89.9, 179.9)),
    ],
)
def test_distance_symmetry(a, b):
    pa, pb = GeoPoint(*a), GeoPoint(*b)
    assert distance_km(pa, pb) == pytest.approx(distance_km(pb, pa), rel=1e-12)


def test_known_distance_anchor():
    d = distance_km(GeoPoint(47.9184, 106.9177), GeoPoint(47.9284, 106.9077))
    assert d == pytest.approx(1.3, abs=0.05)


def test_half_circumference():
    d = distance_km(GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)


def test_haversine_vectorized_matches_scalar():
    lats = np.array([47.9184, 47.95, 48.5])
    lngs = np.array([106.9177, 106.90, 108.0])

    distances = haversine_km(lats, lngs, RESTAURANT.lat, RESTAURANT.lng)

    assert distances.shape == (3,)
    for lat, lng, d in zip(lats, lngs, distances):
        assert d == pytest.approx(distance_km(GeoPoint(lat, lng), RESTAURANT))


# ─────────────────────────────────────────────────────────────────────────────
# evaluate()
# ─────────────────────────────────────────────────────────────────────────────

def test_evaluate_square():
    square = DeliveryPolygon(vertices=[(0, 0), (0, 10), (10, 10), (10, 0)])
    origin = GeoPoint(0, 0)

    assert evaluate(GeoPoint(5, 5), square, origin).in_zone is True
    assert evaluate(GeoPoint(15, 15), square, origin).in_zone is False
    assert is_point_in_polygon(GeoPoint(5, 5), square) is True


def test_evaluate_is_idempotent(ub_polygon):
    point = GeoPoint(47.921, 106.913)
    first = evaluate(point, ub_polygon, RESTAURANT)
    second = evaluate(point, ub_polygon, RESTAURANT)
    assert first == second


def test_end_to_end_restaurant_point(evaluator):
    verdict = evaluator.evaluate(RESTAURANT)
    assert verdict.in_zone is True
    assert verdict.distance_km == 0.0


def test_end_to_end_far_point(evaluator):
    verdict = evaluator.evaluate(GeoPoint(48.5, 108.0))
    assert verdict.in_zone is False
    assert verdict.distance_km > 100


def test_evaluator_matches_module_function(evaluator, ub_polygon):
    point = GeoPoint(47.915, 106.925)
    assert evaluator.evaluate(point) == evaluate(point, ub_polygon, RESTAURANT)


# ─────────────────────────────────────────────────────────────────────────────
# evaluate_many()
# ─────────────────────────────────────────────────────────────────────────────

def test_evaluate_many_matches_evaluate(evaluator):
    points = [
        RESTAURANT,
        (47.925, 106.91),
        (47.935, 106.91),
        GeoPoint(48.5, 108.0),
    ]

    verdicts = evaluator.evaluate_many(points)

    assert len(verdicts) == len(points)
    for point, verdict in zip(points, verdicts):
        point = point if isinstance(point, GeoPoint) else GeoPoint(*point)
        expected = evaluator.evaluate(point)
        assert verdict.in_zone == expected.in_zone
        assert verdict.distance_km == pytest.approx(expected.distance_km)


def test_evaluate_many_empty(evaluator):
    assert evaluator.evaluate_many([]) == []


def test_evaluate_many_rejects_invalid_point(evaluator):
    with pytest.raises(ZoneInputError):
        evaluator.evaluate_many([(47.9, 106.9), (120.0, 106.9)])


def test_verdict_serialization():
    verdict = ZoneVerdict(in_zone=True, distance_km=0.42)
    assert verdict.to_dict() == {'in_zone': True, 'distance_km': 0.42}
    assert ZoneVerdict.from_dict(verdict.to_dict()) == verdict

    with pytest.raises(ValueError):
        ZoneVerdict.from_dict({'in_zone': True})
