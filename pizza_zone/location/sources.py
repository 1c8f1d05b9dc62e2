"""
Location Sources Module
=======================

Providers of a customer location sample.

Design:
- LocationSource protocol: locate() -> Optional[LocationSample]
- A source signals "nothing available" with None or LocationUnavailableError
- Provenance (source kind, accuracy, address) is display metadata only
- Providers own their timeouts; sources never block the evaluator
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Sequence, Tuple, Union

from pizza_zone.errors import ZoneInputError
from pizza_zone.geometry.shapes import GeoPoint


class SourceKind(str, Enum):
    """Where a location sample came from."""
    DEVICE = "device"        # Device geolocation sensor
    MANUAL = "manual"        # Manual address entry
    ESTIMATE = "estimate"    # Coarse network-based estimate


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LocationSample:
    """
    A resolved point plus display metadata.

    Attributes:
        point: The location
        source: Provenance of the sample
        accuracy_m: Reported accuracy radius in meters (optional)
        address: Human-entered or reverse-geocoded text (optional)
        captured_at: When the sample was taken (timezone-aware)
    """

    point: GeoPoint
    source: SourceKind
    accuracy_m: Optional[float] = None
    address: Optional[str] = None
    captured_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if not isinstance(self.captured_at, datetime):
            raise ZoneInputError(f"captured_at must be a datetime, got {type(self.captured_at).__name__}")

        # Naive timestamps cannot be compared with the UTC clock
        if self.captured_at.tzinfo is None or self.captured_at.utcoffset() is None:
            raise ZoneInputError(f"captured_at must be timezone-aware, got {self.captured_at.isoformat()}")

    def age_s(self, now: Optional[datetime] = None) -> float:
        """Seconds elapsed since capture."""
        now = now or _utcnow()
        return (now - self.captured_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'point': self.point.to_dict(),
            'source': self.source.value,
            'accuracy_m': self.accuracy_m,
            'address': self.address,
            'captured_at': self.captured_at.isoformat(),
        }


class LocationSource(Protocol):
    """Protocol for location sources (interface)."""

    name: str

    def locate(self) -> Optional[LocationSample]:
        """
        Produce a sample, or None when no location is available.

        May raise LocationUnavailableError instead of returning None.
        """
        ...


class StaticLocationSource:
    """Always returns the same sample (kiosk, defaults, tests)."""

    def __init__(self, sample: LocationSample, name: str = "static"):
        self.name = name
        self.sample = sample

    def locate(self) -> Optional[LocationSample]:
        return self.sample


ProviderResult = Optional[Union[Tuple[float, float], Tuple[float, float, Optional[float]]]]


class CallableLocationSource:
    """
    Adapts a provider callable to the LocationSource protocol.

    The provider returns (lat, lng), (lat, lng, accuracy_m) or None and is
    expected to apply its own timeout (device geolocation bridges usually
    give up after ~15 s) and report failure with None or
    LocationUnavailableError.

    Example:
        >>> gps = CallableLocationSource("gps", SourceKind.DEVICE, bridge.read_fix)
    """

    def __init__(
        self,
        name: str,
        kind: SourceKind,
        provider: Callable[[], ProviderResult],
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.name = name
        self.kind = kind
        self.provider = provider
        self.clock = clock

    def locate(self) -> Optional[LocationSample]:
        result = self.provider()
        if result is None:
            return None

        if len(result) == 3:
            lat, lng, accuracy_m = result
        elif len(result) == 2:
            lat, lng = result
            accuracy_m = None
        else:
            raise ZoneInputError(f"Provider '{self.name}' returned malformed fix: {result!r}")

        return LocationSample(
            point=GeoPoint(lat=lat, lng=lng),
            source=self.kind,
            accuracy_m=accuracy_m,
            captured_at=self.clock(),
        )


class DistrictLookupSource:
    """
    Manual address entry resolved against a district gazetteer.

    Matching is a case-insensitive substring search of the address for each
    district name, in gazetteer order; the first match wins.

    Usage:
        lookup = DistrictLookupSource({"сүхбаатар": GeoPoint(47.9184, 106.9177)})
        lookup.match("Сүхбаатар дүүрэг, 1-р хороо")   # -> GeoPoint
        source = lookup.for_address("Сүхбаатар дүүрэг")
    """

    def __init__(
        self,
        districts: Mapping[str, GeoPoint],
        address: str = "",
        name: str = "district_lookup",
    ):
        self.name = name
        self.districts = dict(districts)
        self.address = address

    def for_address(self, address: str) -> "DistrictLookupSource":
        """Same gazetteer, bound to another address."""
        return DistrictLookupSource(self.districts, address=address, name=self.name)

    def match(self, address: str) -> Optional[Tuple[str, GeoPoint]]:
        """Return (district, point) for the first district named in address."""
        needle = address.strip().casefold()
        if not needle:
            return None

        for district, point in self.districts.items():
            if district.casefold() in needle:
                return district, point
        return None

    def locate(self) -> Optional[LocationSample]:
        found = self.match(self.address)
        if found is None:
            return None

        _, point = found
        return LocationSample(
            point=point,
            source=SourceKind.MANUAL,
            address=self.address.strip(),
        )


def gazetteer_from_pairs(pairs: Mapping[str, Sequence[float]]) -> Dict[str, GeoPoint]:
    """Build a district gazetteer from {name: [lat, lng]}."""
    return {name: GeoPoint.from_pair(coords) for name, coords in pairs.items()}
