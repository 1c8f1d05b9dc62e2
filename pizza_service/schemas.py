"""
Zone Check Result Schema
========================

Bounded Context: Data handed to the presentation layer (storefront map,
checkout, delivery dashboard).

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Serialization: to_dict() / from_dict() for JSON export
- Schema versioning for evolution
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pizza_zone import DeliveryEstimate, GeoPoint, LocationSample, ZoneVerdict

SCHEMA_VERSION = "1.0"


@dataclass(frozen=True)
class Timestamp:
    """
    Immutable ISO 8601 timestamp wrapper.

    Example:
        >>> Timestamp.now().value
        '2026-10-19T08:30:45.123456+00:00'
    """
    value: str

    @classmethod
    def now(cls) -> 'Timestamp':
        return cls(value=datetime.now(timezone.utc).isoformat())


@dataclass(frozen=True)
class ZoneCheckResult:
    """
    One delivery zone check, ready for the presentation layer.

    Attributes:
        zone_id: Configured zone identifier
        point: Evaluated location
        verdict: Containment and distance
        estimate: Delivery time range for the distance
        timestamp: When the check ran
        source: Location provenance ("device", "manual", "estimate"), if known
        accuracy_m: Reported accuracy of the location sample, if known
        address: Address text the location came from, if any
        schema_version: Result schema version

    Example:
        >>> result.to_dict()
        {'schema_version': '1.0', 'zone_id': 'ub_central', 'in_zone': True,
         'distance_km': 0.42, 'estimate': {'min_minutes': 15, ...}, ...}
    """
    zone_id: str
    point: GeoPoint
    verdict: ZoneVerdict
    estimate: DeliveryEstimate
    timestamp: Timestamp
    source: Optional[str] = None
    accuracy_m: Optional[float] = None
    address: Optional[str] = None
    schema_version: str = SCHEMA_VERSION

    @property
    def in_zone(self) -> bool:
        return self.verdict.in_zone

    @property
    def distance_km(self) -> float:
        return self.verdict.distance_km

    @classmethod
    def build(
        cls,
        zone_id: str,
        point: GeoPoint,
        verdict: ZoneVerdict,
        estimate: DeliveryEstimate,
        sample: Optional[LocationSample] = None,
    ) -> 'ZoneCheckResult':
        return cls(
            zone_id=zone_id,
            point=point,
            verdict=verdict,
            estimate=estimate,
            timestamp=Timestamp.now(),
            source=sample.source.value if sample else None,
            accuracy_m=sample.accuracy_m if sample else None,
            address=sample.address if sample else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'schema_version': self.schema_version,
            'zone_id': self.zone_id,
            'timestamp': self.timestamp.value,
            'point': self.point.to_dict(),
            'in_zone': self.verdict.in_zone,
            'distance_km': self.verdict.distance_km,
            'estimate': self.estimate.to_dict(),
            'source': self.source,
            'accuracy_m': self.accuracy_m,
            'address': self.address,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ZoneCheckResult':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            return cls(
                zone_id=data['zone_id'],
                point=GeoPoint(lat=data['point']['lat'], lng=data['point']['lng']),
                verdict=ZoneVerdict.from_dict(data),
                estimate=DeliveryEstimate.from_dict(data['estimate']),
                timestamp=Timestamp(value=data['timestamp']),
                source=data.get('source'),
                accuracy_m=data.get('accuracy_m'),
                address=data.get('address'),
                schema_version=data.get('schema_version', SCHEMA_VERSION),
            )
        except KeyError as e:
            raise ValueError(f"Missing required ZoneCheckResult field: {e}")
