"""
Great-Circle Distance Module
============================

Haversine distance on a spherical earth (mean radius 6371 km).

Design:
- Pure functions, no state
- numpy ufuncs so the same formula serves scalars and arrays
- Spherical model is sufficient at urban scale (no ellipsoid)
"""

import numpy as np
from typing import Union

from pizza_zone.geometry.shapes import GeoPoint

EARTH_RADIUS_KM = 6371.0

ArrayLike = Union[float, np.ndarray]


def haversine_km(lat1: ArrayLike, lng1: ArrayLike, lat2: ArrayLike, lng2: ArrayLike) -> ArrayLike:
    """
    Haversine great-circle distance in kilometers.

    Accepts scalars or broadcastable numpy arrays of decimal degrees.

    Formula:
        a = sin²(Δlat/2) + cos(lat1)·cos(lat2)·sin²(Δlng/2)
        c = 2·atan2(√a, √(1−a))
        d = R·c
    """
    d_lat = np.radians(np.subtract(lat2, lat1))
    d_lng = np.radians(np.subtract(lng2, lng1))

    a = (
        np.sin(d_lat / 2) ** 2
        + np.cos(np.radians(lat1)) * np.cos(np.radians(lat2)) * np.sin(d_lng / 2) ** 2
    )
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points in kilometers.

    Symmetric, and exactly 0.0 for identical points.
    """
    return float(haversine_km(a.lat, a.lng, b.lat, b.lng))
