"""
Geographic Shapes Module
========================

Pure geographic representations - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Latitude is the y axis, longitude is the x axis (flat-earth approximation,
  valid at city scale)
- Ray casting (even-odd rule) for point-in-polygon
- Thread-safe by design (immutability)
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from pizza_zone.errors import ZoneConfigError, ZoneInputError

LatLng = Tuple[float, float]


@dataclass(frozen=True)
class GeoPoint:
    """
    Immutable latitude/longitude pair in decimal degrees (WGS84).

    Attributes:
        lat: Latitude in [-90, 90]
        lng: Longitude in [-180, 180]

    Raises:
        ZoneInputError: If a coordinate is non-finite or out of range

    Example:
        >>> GeoPoint(lat=47.9184, lng=106.9177).as_tuple()
        (47.9184, 106.9177)
    """

    lat: float
    lng: float

    def __post_init__(self):
        """Validate coordinate ranges."""
        try:
            lat = float(self.lat)
            lng = float(self.lng)
        except (TypeError, ValueError) as e:
            raise ZoneInputError(f"Coordinates must be numeric, got ({self.lat!r}, {self.lng!r})") from e

        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ZoneInputError(f"Coordinates must be finite, got ({lat}, {lng})")
        if not -90.0 <= lat <= 90.0:
            raise ZoneInputError(f"Latitude must be in [-90, 90], got {lat}")
        if not -180.0 <= lng <= 180.0:
            raise ZoneInputError(f"Longitude must be in [-180, 180], got {lng}")

        object.__setattr__(self, 'lat', lat)
        object.__setattr__(self, 'lng', lng)

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> "GeoPoint":
        """Build from a (lat, lng) pair."""
        if len(pair) != 2:
            raise ZoneInputError(f"Expected (lat, lng) pair, got {pair!r}")
        return cls(lat=pair[0], lng=pair[1])

    def as_tuple(self) -> LatLng:
        return (self.lat, self.lng)

    def to_dict(self) -> dict:
        return {'lat': self.lat, 'lng': self.lng}


@dataclass(frozen=True)
class DeliveryPolygon:
    """
    Immutable delivery boundary with ray-casting point-in-polygon.

    Design:
    - Vertices validated once at init (fail-fast, configuration errors only)
    - Stored as a read-only Nx2 float array of (lat, lng)
    - Closing vertex optional: a repeated first vertex is a zero-length edge
      and never counts as a crossing

    Attributes:
        vertices: Nx2 array (or sequence) of (lat, lng) vertices, or GeoPoints
    """

    vertices: np.ndarray

    def __post_init__(self):
        """Normalize vertices to a read-only array and validate them."""
        vertices = self._as_array(self.vertices)

        if vertices.ndim != 2 or vertices.shape[1] != 2:
            raise ZoneConfigError(f"vertices must be Nx2 (lat, lng), got shape {vertices.shape}")
        if not np.all(np.isfinite(vertices)):
            raise ZoneConfigError("Polygon vertices must be finite numbers")
        if np.any(np.abs(vertices[:, 0]) > 90.0) or np.any(np.abs(vertices[:, 1]) > 180.0):
            raise ZoneConfigError("Polygon vertices must be valid latitude/longitude pairs")

        distinct = len(np.unique(vertices, axis=0))
        if distinct < 3:
            raise ZoneConfigError(f"Polygon must have at least 3 distinct vertices, got {distinct}")

        if self._shoelace_area(vertices) == 0.0:
            raise ZoneConfigError("Polygon vertices are collinear (zero area)")

        vertices.flags.writeable = False
        object.__setattr__(self, 'vertices', vertices)

    @staticmethod
    def _as_array(vertices) -> np.ndarray:
        if isinstance(vertices, np.ndarray):
            try:
                return np.array(vertices, dtype=np.float64)
            except (TypeError, ValueError) as e:
                raise ZoneConfigError(f"Polygon vertices must be numeric: {e}") from e

        rows = []
        for vertex in vertices:
            if isinstance(vertex, GeoPoint):
                rows.append(vertex.as_tuple())
            else:
                rows.append(tuple(vertex))
        try:
            return np.array(rows, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ZoneConfigError(f"Polygon vertices must be numeric: {e}") from e

    @staticmethod
    def _shoelace_area(vertices: np.ndarray) -> float:
        y = vertices[:, 0]
        x = vertices[:, 1]
        return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)

    def __len__(self) -> int:
        return len(self.vertices)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DeliveryPolygon):
            return NotImplemented
        return np.array_equal(self.vertices, other.vertices)

    def __hash__(self) -> int:
        return hash(self.vertices.tobytes())

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        """Vertices as GeoPoints."""
        return tuple(GeoPoint(lat=float(lat), lng=float(lng)) for lat, lng in self.vertices)

    def contains_point(self, point: Union[GeoPoint, LatLng]) -> bool:
        """
        Check if point is inside polygon (ray casting, even-odd rule).

        A horizontal ray is cast from the point towards increasing longitude.
        Edge (v[i], v[j]), j being the previous vertex, is crossed when its
        endpoint latitudes straddle the point's latitude and its longitude
        intercept lies beyond the point. Points exactly on the boundary get
        whatever the strict comparisons yield.

        Args:
            point: GeoPoint or (lat, lng)

        Returns:
            True if point is inside polygon, False otherwise
        """
        if isinstance(point, GeoPoint):
            y, x = point.lat, point.lng
        else:
            y, x = float(point[0]), float(point[1])

        yi = self.vertices[:, 0]
        xi = self.vertices[:, 1]
        yj = np.roll(yi, 1)
        xj = np.roll(xi, 1)

        straddles = (yi > y) != (yj > y)

        # Horizontal edges never straddle, their intercepts are masked out
        with np.errstate(divide='ignore', invalid='ignore'):
            intercepts = (xj - xi) * (y - yi) / (yj - yi) + xi

        crossings = int(np.count_nonzero(straddles & (x < intercepts)))
        return crossings % 2 == 1

    def contains_points(self, points: np.ndarray) -> np.ndarray:
        """
        Vectorized contains_point for many (lat, lng) rows.

        Args:
            points: Mx2 array of (lat, lng)

        Returns:
            Boolean mask of shape (M,) where True = inside polygon
        """
        points = np.asarray(points, dtype=np.float64)
        if len(points) == 0:
            return np.array([], dtype=bool)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ZoneInputError(f"points must be Mx2 (lat, lng), got shape {points.shape}")

        # Shape (M, 1) against edges of shape (N,)
        y = points[:, 0:1]
        x = points[:, 1:2]

        yi = self.vertices[:, 0]
        xi = self.vertices[:, 1]
        yj = np.roll(yi, 1)
        xj = np.roll(xi, 1)

        straddles = (yi > y) != (yj > y)
        with np.errstate(divide='ignore', invalid='ignore'):
            intercepts = (xj - xi) * (y - yi) / (yj - yi) + xi

        crossings = np.count_nonzero(straddles & (x < intercepts), axis=1)
        return crossings % 2 == 1

    def to_list(self) -> list:
        """Vertices as a list of [lat, lng] pairs (JSON/YAML friendly)."""
        return [[float(lat), float(lng)] for lat, lng in self.vertices]
