"""
Delivery Zone Service - Process-wide zone check orchestrator.

This module provides the DeliveryZoneService class which is built once from
configuration and answers delivery zone checks for the storefront, checkout
and delivery dashboard.

Architecture:
- ZoneEvaluator: containment + distance (pizza_zone.evaluation)
- DeliveryTimeTable: distance to minutes (pizza_zone.evaluation)
- LocationResolver: device -> manual -> estimate fallback (pizza_zone.location)
- StructuredLogger: JSON events for every check (pizza_service.logging)

Thread Safety:
- Holds immutable configuration only; safe to share across threads
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from pizza_zone import (
    DeliveryEstimate,
    DistrictLookupSource,
    GeoPoint,
    LocationResolver,
    LocationSample,
    ZoneEvaluator,
    ZoneInputError,
)
from pizza_zone.geometry.shapes import LatLng
from pizza_zone.location.resolver import AttemptOutcome
from pizza_zone.location.sources import LocationSource
from pizza_service.config import DeliveryZoneConfig
from pizza_service.logging import LogEvent, StructuredLogger, create_logger
from pizza_service.schemas import ZoneCheckResult


class DeliveryZoneService:
    """
    Delivery zone checks bound to one configuration.

    Usage:
        service = DeliveryZoneService.from_yaml("config/pizza_zone/zone_config.yaml")

        result = service.check_point(47.92, 106.915)
        result.in_zone, result.distance_km, str(result.estimate)

        result = service.check_address("Сүхбаатар дүүрэг, 1-р хороо")

        result = service.locate_and_check([gps_source, ip_source])
    """

    def __init__(
        self,
        config: DeliveryZoneConfig,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize the service.

        Args:
            config: Validated delivery zone configuration
            logger: Structured logger (default: component "zone_service")
        """
        self.config = config
        self.logger = logger or create_logger("zone_service")

        self.evaluator = ZoneEvaluator(config.polygon, config.restaurant)
        self.district_lookup = DistrictLookupSource(config.districts)

        self.logger.info(
            event=LogEvent.ZONE_CONFIG_LOADED,
            message=f"Delivery zone '{config.zone_id}' ready",
            metadata={
                'zone_id': config.zone_id,
                'vertices': len(config.polygon),
                'buckets': len(config.time_table.buckets),
                'districts': len(config.districts),
            }
        )

    @classmethod
    def from_yaml(
        cls,
        yaml_path: Union[str, Path],
        logger: Optional[StructuredLogger] = None,
    ) -> "DeliveryZoneService":
        return cls(DeliveryZoneConfig.from_yaml(yaml_path), logger=logger)

    def estimate(self, distance_km: float) -> DeliveryEstimate:
        return self.config.time_table.estimate(distance_km)

    def check_point(self, lat: float, lng: float) -> ZoneCheckResult:
        """
        Check raw coordinates.

        Raises:
            ZoneInputError: If coordinates are out of range
        """
        try:
            point = GeoPoint(lat=lat, lng=lng)
        except ZoneInputError as e:
            self.logger.warning(
                event=LogEvent.INPUT_REJECTED,
                message=str(e),
                metadata={'lat': lat, 'lng': lng}
            )
            raise
        return self._check(point)

    def check_sample(self, sample: LocationSample) -> ZoneCheckResult:
        return self._check(sample.point, sample)

    def check_many(self, points: Sequence[Union[GeoPoint, LatLng]]) -> List[ZoneCheckResult]:
        """
        Check many points in one vectorized pass (e.g. the delivery dashboard
        re-checking open orders).
        """
        verdicts = self.evaluator.evaluate_many(points)
        results = [
            ZoneCheckResult.build(
                zone_id=self.config.zone_id,
                point=p if isinstance(p, GeoPoint) else GeoPoint.from_pair(p),
                verdict=verdict,
                estimate=self.estimate(verdict.distance_km),
            )
            for p, verdict in zip(points, verdicts)
        ]

        self.logger.info(
            event=LogEvent.ZONE_BATCH_EVALUATED,
            message=f"Evaluated {len(results)} points",
            metadata={
                'zone_id': self.config.zone_id,
                'count': len(results),
                'in_zone': sum(1 for r in results if r.in_zone),
            }
        )
        return results

    def check_address(self, address: str) -> Optional[ZoneCheckResult]:
        """
        Resolve a manually entered address through the district gazetteer.

        Returns:
            ZoneCheckResult, or None when no configured district matches
        """
        sample = self.district_lookup.for_address(address).locate()
        if sample is None:
            self.logger.info(
                event=LogEvent.ADDRESS_NOT_FOUND,
                message="Address does not name a known district",
                metadata={'address': address}
            )
            return None
        return self.check_sample(sample)

    def address_source(self, address: str) -> DistrictLookupSource:
        """District lookup source for use in a locate_and_check() chain."""
        return self.district_lookup.for_address(address)

    def locate_and_check(self, sources: Sequence[LocationSource]) -> Optional[ZoneCheckResult]:
        """
        Try location sources in priority order and check the first usable one.

        Returns:
            ZoneCheckResult, or None when every source failed
        """
        resolver = LocationResolver(sources, max_age_s=self.config.max_sample_age_s)
        resolution = resolver.resolve()

        for attempt in resolution.attempts:
            if attempt.outcome == AttemptOutcome.RESOLVED:
                self.logger.info(
                    event=LogEvent.LOCATION_RESOLVED,
                    message=f"Location from source '{attempt.source}'",
                    metadata={'source': attempt.source}
                )
            else:
                self.logger.warning(
                    event=LogEvent.LOCATION_SOURCE_FAILED,
                    message=f"Source '{attempt.source}' gave no usable location",
                    metadata={
                        'source': attempt.source,
                        'outcome': attempt.outcome.value,
                        'detail': attempt.detail,
                    }
                )

        if not resolution.resolved:
            self.logger.warning(
                event=LogEvent.LOCATION_UNAVAILABLE,
                message="No location source produced a usable sample",
                metadata={'sources': [s.name for s in sources]}
            )
            return None

        return self.check_sample(resolution.sample)

    def _check(self, point: GeoPoint, sample: Optional[LocationSample] = None) -> ZoneCheckResult:
        verdict = self.evaluator.evaluate(point)
        estimate = self.estimate(verdict.distance_km)

        self.logger.info(
            event=LogEvent.ZONE_EVALUATED,
            message="Point inside delivery zone" if verdict.in_zone else "Point outside delivery zone",
            metadata={
                'zone_id': self.config.zone_id,
                'in_zone': verdict.in_zone,
                'distance_km': round(verdict.distance_km, 3),
                'estimate': str(estimate),
                'source': sample.source.value if sample else None,
            }
        )

        return ZoneCheckResult.build(
            zone_id=self.config.zone_id,
            point=point,
            verdict=verdict,
            estimate=estimate,
            sample=sample,
        )
