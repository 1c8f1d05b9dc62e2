"""
Configuration schema for the delivery zone service.

This module defines the configuration structure for the zone check: the
restaurant reference point, the delivery polygon, the distance-to-minutes
table, the district gazetteer used for manual address entry, and location
sample freshness.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union
import yaml

from pizza_zone import (
    DEFAULT_TIME_TABLE,
    DeliveryPolygon,
    DeliveryTimeTable,
    GeoPoint,
    ZoneConfigError,
    ZoneInputError,
)

logger = logging.getLogger(__name__)


# Storefront defaults (central Ulaanbaatar branch)
DEFAULT_RESTAURANT = (47.9184, 106.9177)
DEFAULT_POLYGON = [
    (47.9284, 106.9277),  # North-East
    (47.9284, 106.9077),  # North-West
    (47.9084, 106.9077),  # South-West
    (47.9084, 106.9277),  # South-East
]
DEFAULT_DISTRICTS = {
    "сүхбаатар": (47.9184, 106.9177),
    "баянзүрх": (47.9084, 106.9377),
    "чингэлтэй": (47.9284, 106.9077),
    "хан-уул": (47.8984, 106.9277),
    "баянгол": (47.9384, 106.9177),
    "сонгинохайрхан": (47.9184, 106.8877),
}
DEFAULT_MAX_SAMPLE_AGE_S = 300.0


@dataclass(frozen=True)
class DeliveryZoneConfig:
    """
    Main configuration for the delivery zone service.

    Loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    zone_id: str
    restaurant: GeoPoint
    polygon: DeliveryPolygon
    restaurant_name: str = ""
    time_table: DeliveryTimeTable = DEFAULT_TIME_TABLE
    districts: Mapping[str, GeoPoint] = field(default_factory=dict)
    max_sample_age_s: Optional[float] = DEFAULT_MAX_SAMPLE_AGE_S

    def __post_init__(self):
        """Validate configuration."""
        if not isinstance(self.zone_id, str) or not self.zone_id.strip():
            raise ZoneConfigError(f"zone_id must be a non-empty string, got {self.zone_id!r}")

        # Read-only view, the gazetteer is shared by every lookup
        object.__setattr__(self, 'districts', MappingProxyType(dict(self.districts)))

        if not isinstance(self.restaurant, GeoPoint):
            raise ZoneConfigError(f"restaurant must be a GeoPoint, got {type(self.restaurant)}")

        if not isinstance(self.polygon, DeliveryPolygon):
            raise ZoneConfigError(f"polygon must be a DeliveryPolygon, got {type(self.polygon)}")

        if self.max_sample_age_s is not None:
            if not math.isfinite(self.max_sample_age_s) or self.max_sample_age_s <= 0:
                raise ZoneConfigError(
                    f"max_sample_age_s must be > 0, got {self.max_sample_age_s}"
                )

        for name in self.districts:
            if not name.strip():
                raise ZoneConfigError("District names cannot be empty")

        if not self.polygon.contains_point(self.restaurant):
            logger.warning(
                f"Restaurant {self.restaurant.as_tuple()} lies outside delivery "
                f"polygon of zone '{self.zone_id}'"
            )

    @classmethod
    def default(cls) -> "DeliveryZoneConfig":
        """Built-in configuration of the central Ulaanbaatar branch."""
        return cls.from_dict({
            'zone_id': 'ub_central',
            'restaurant': {
                'name': 'Central Ulaanbaatar',
                'lat': DEFAULT_RESTAURANT[0],
                'lng': DEFAULT_RESTAURANT[1],
            },
            'delivery_polygon': [list(v) for v in DEFAULT_POLYGON],
            'districts': {name: list(v) for name, v in DEFAULT_DISTRICTS.items()},
            'location': {'max_sample_age_s': DEFAULT_MAX_SAMPLE_AGE_S},
        })

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "DeliveryZoneConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            zone_id: "ub_central"

            restaurant:
              name: "Central Ulaanbaatar"
              lat: 47.9184
              lng: 106.9177

            delivery_polygon:   # [lat, lng] vertices
              - [47.9284, 106.9277]
              - [47.9284, 106.9077]
              - [47.9084, 106.9077]
              - [47.9084, 106.9277]

            delivery_times:
              buckets:
                - {max_distance_km: 0.5, min_minutes: 15, max_minutes: 20}
                - {max_distance_km: 1.0, min_minutes: 20, max_minutes: 25}
              fallback: {min_minutes: 25, max_minutes: null}

            districts:
              "сүхбаатар": [47.9184, 106.9177]

            location:
              max_sample_age_s: 300

        Raises:
            ZoneConfigError: If the file is missing, unreadable or invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise ZoneConfigError(f"Config file not found: {path}")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ZoneConfigError(f"Invalid YAML in {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ZoneConfigError(f"Cannot read config {path}: {e}") from e

        config = cls.from_dict(data)
        logger.info(f"Loaded delivery zone config '{config.zone_id}' from {path}")
        return config

    @classmethod
    def from_dict(cls, data: Any) -> "DeliveryZoneConfig":
        """
        Build configuration from already-parsed data.

        Raises:
            ZoneConfigError: Naming the offending field
        """
        if not isinstance(data, Mapping):
            raise ZoneConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        try:
            zone_id = data["zone_id"]
            restaurant_data = data["restaurant"]
            polygon_data = data["delivery_polygon"]
        except KeyError as e:
            raise ZoneConfigError(f"Missing required config field: {e}") from e

        if zone_id is None:
            raise ZoneConfigError("zone_id cannot be null")
        if isinstance(zone_id, (int, float)) and not isinstance(zone_id, bool):
            zone_id = str(zone_id)

        restaurant, restaurant_name = _parse_restaurant(restaurant_data)

        if not isinstance(polygon_data, list):
            raise ZoneConfigError("delivery_polygon must be a list of [lat, lng] pairs")
        polygon = DeliveryPolygon(vertices=[_parse_pair(v, "delivery_polygon") for v in polygon_data])

        time_table = _parse_time_table(data.get("delivery_times"))

        districts_data = data.get("districts") or {}
        if not isinstance(districts_data, Mapping):
            raise ZoneConfigError("districts must be a mapping of name -> [lat, lng]")
        districts = {
            str(name): _point(_parse_pair(coords, f"districts.{name}"), f"districts.{name}")
            for name, coords in districts_data.items()
        }

        location_data = data.get("location") or {}
        if not isinstance(location_data, Mapping):
            raise ZoneConfigError("location must be a mapping")
        max_sample_age_s = location_data.get("max_sample_age_s", DEFAULT_MAX_SAMPLE_AGE_S)
        if max_sample_age_s is not None:
            try:
                max_sample_age_s = float(max_sample_age_s)
            except (TypeError, ValueError) as e:
                raise ZoneConfigError(f"location.max_sample_age_s must be a number: {e}") from e

        return cls(
            zone_id=zone_id,
            restaurant=restaurant,
            polygon=polygon,
            restaurant_name=restaurant_name,
            time_table=time_table,
            districts=districts,
            max_sample_age_s=max_sample_age_s,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a YAML/JSON friendly dict (inverse of from_dict)."""
        return {
            'zone_id': self.zone_id,
            'restaurant': {
                'name': self.restaurant_name,
                'lat': self.restaurant.lat,
                'lng': self.restaurant.lng,
            },
            'delivery_polygon': self.polygon.to_list(),
            'delivery_times': self.time_table.to_dict(),
            'districts': {name: [p.lat, p.lng] for name, p in self.districts.items()},
            'location': {'max_sample_age_s': self.max_sample_age_s},
        }


def _parse_pair(value: Any, field_name: str) -> tuple:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ZoneConfigError(f"{field_name}: expected [lat, lng], got {value!r}")
    try:
        return (float(value[0]), float(value[1]))
    except (TypeError, ValueError) as e:
        raise ZoneConfigError(f"{field_name}: coordinates must be numbers, got {value!r}") from e


def _point(pair: tuple, field_name: str) -> GeoPoint:
    try:
        return GeoPoint(lat=pair[0], lng=pair[1])
    except ZoneInputError as e:
        raise ZoneConfigError(f"{field_name}: {e}") from e


def _parse_restaurant(data: Any) -> tuple:
    if isinstance(data, (list, tuple)):
        return _point(_parse_pair(data, "restaurant"), "restaurant"), ""

    if not isinstance(data, Mapping):
        raise ZoneConfigError("restaurant must be a mapping with lat/lng or a [lat, lng] pair")

    try:
        pair = _parse_pair([data["lat"], data["lng"]], "restaurant")
    except KeyError as e:
        raise ZoneConfigError(f"Missing required restaurant field: {e}") from e
    name = data.get("name")
    if name is None:
        return _point(pair, "restaurant"), ""
    if not isinstance(name, str):
        raise ZoneConfigError(f"restaurant.name must be a string, got {name!r}")
    return _point(pair, "restaurant"), name


def _parse_time_table(data: Any) -> DeliveryTimeTable:
    if data is None:
        return DEFAULT_TIME_TABLE
    if not isinstance(data, Mapping):
        raise ZoneConfigError("delivery_times must be a mapping with buckets and fallback")

    try:
        rows = [
            (float(b["max_distance_km"]), int(b["min_minutes"]), int(b["max_minutes"]))
            for b in data["buckets"]
        ]
        fallback_data = data["fallback"]
        fallback_max = fallback_data.get("max_minutes")
        fallback = (
            int(fallback_data["min_minutes"]),
            None if fallback_max is None else int(fallback_max),
        )
    except KeyError as e:
        raise ZoneConfigError(f"Missing required delivery_times field: {e}") from e
    except (TypeError, ValueError, AttributeError) as e:
        raise ZoneConfigError(f"Invalid delivery_times entry: {e}") from e

    return DeliveryTimeTable.from_rows(rows, fallback)
