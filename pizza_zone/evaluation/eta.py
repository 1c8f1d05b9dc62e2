"""
Delivery Time Estimation Module
===============================

Maps a distance to an estimated delivery-time range through a configurable
step table.

Design:
- Thresholds are configuration, not code (DeliveryTimeTable)
- First bucket whose max_distance_km exceeds the distance wins
- Open-ended fallback bucket past the last threshold
- Table validated at construction so estimates are monotonic in distance
- Structured result (minutes), wording left to the presentation layer
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from pizza_zone.errors import ZoneConfigError, ZoneInputError


@dataclass(frozen=True)
class DeliveryEstimate:
    """
    Estimated delivery time range in minutes.

    Attributes:
        min_minutes: Lower bound of the range
        max_minutes: Upper bound, None for the open-ended bucket

    Example:
        >>> str(DeliveryEstimate(15, 20))
        '15-20'
        >>> str(DeliveryEstimate(45, None))
        '45+'
    """

    min_minutes: int
    max_minutes: Optional[int] = None

    @property
    def is_open_ended(self) -> bool:
        return self.max_minutes is None

    def __str__(self) -> str:
        if self.max_minutes is None:
            return f"{self.min_minutes}+"
        return f"{self.min_minutes}-{self.max_minutes}"

    def sort_key(self) -> Tuple[int, float]:
        """Ordering key: open-ended ranges sort after bounded ones."""
        upper = math.inf if self.max_minutes is None else self.max_minutes
        return (self.min_minutes, upper)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min_minutes': self.min_minutes,
            'max_minutes': self.max_minutes,
            'label': str(self),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeliveryEstimate':
        try:
            max_minutes = data.get('max_minutes')
            return cls(
                min_minutes=int(data['min_minutes']),
                max_minutes=None if max_minutes is None else int(max_minutes),
            )
        except KeyError as e:
            raise ValueError(f"Missing required DeliveryEstimate field: {e}")


@dataclass(frozen=True)
class DeliveryTimeBucket:
    """
    One row of the time table: distances below max_distance_km take
    min_minutes..max_minutes.
    """

    max_distance_km: float
    min_minutes: int
    max_minutes: int

    def __post_init__(self):
        if not math.isfinite(self.max_distance_km) or self.max_distance_km <= 0:
            raise ZoneConfigError(
                f"max_distance_km must be finite and > 0, got {self.max_distance_km}"
            )
        if self.min_minutes < 0 or self.max_minutes < self.min_minutes:
            raise ZoneConfigError(
                f"Invalid minutes range {self.min_minutes}-{self.max_minutes} "
                f"for bucket < {self.max_distance_km} km"
            )

    @property
    def estimate(self) -> DeliveryEstimate:
        return DeliveryEstimate(self.min_minutes, self.max_minutes)


@dataclass(frozen=True)
class DeliveryTimeTable:
    """
    Ordered distance buckets plus an open-ended fallback.

    Invariants:
        - at least one bucket
        - max_distance_km strictly increasing
        - minutes non-decreasing from bucket to bucket, fallback included

    Attributes:
        buckets: Ordered buckets
        fallback: Estimate used past the last threshold
    """

    buckets: Tuple[DeliveryTimeBucket, ...]
    fallback: DeliveryEstimate

    def __post_init__(self):
        """Validate ordering and monotonicity."""
        buckets = tuple(self.buckets)
        object.__setattr__(self, 'buckets', buckets)

        if not buckets:
            raise ZoneConfigError("Delivery time table needs at least one bucket")

        if self.fallback.min_minutes < 0 or (
            self.fallback.max_minutes is not None
            and self.fallback.max_minutes < self.fallback.min_minutes
        ):
            raise ZoneConfigError(f"Invalid fallback range {self.fallback}")

        for previous, current in zip(buckets, buckets[1:]):
            if current.max_distance_km <= previous.max_distance_km:
                raise ZoneConfigError(
                    "Bucket thresholds must be strictly increasing, got "
                    f"{previous.max_distance_km} then {current.max_distance_km}"
                )
            if (current.min_minutes < previous.min_minutes
                    or current.max_minutes < previous.max_minutes):
                raise ZoneConfigError(
                    "Bucket minutes must not decrease with distance, got "
                    f"{previous.estimate} then {current.estimate}"
                )

        last = buckets[-1]
        if self.fallback.min_minutes < last.min_minutes or (
            self.fallback.max_minutes is not None
            and self.fallback.max_minutes < last.max_minutes
        ):
            raise ZoneConfigError(
                f"Fallback {self.fallback} must not be faster than last bucket {last.estimate}"
            )

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Tuple[float, int, int]],
        fallback: Tuple[int, Optional[int]],
    ) -> "DeliveryTimeTable":
        """
        Build from plain tuples.

        Example:
            >>> DeliveryTimeTable.from_rows([(1.0, 20, 25), (3.0, 25, 35)], (35, 45))
        """
        return cls(
            buckets=tuple(DeliveryTimeBucket(float(d), int(lo), int(hi)) for d, lo, hi in rows),
            fallback=DeliveryEstimate(int(fallback[0]), None if fallback[1] is None else int(fallback[1])),
        )

    def estimate(self, distance_km: float) -> DeliveryEstimate:
        """
        Select the first bucket whose threshold exceeds the distance.

        Raises:
            ZoneInputError: If distance is negative or non-finite
        """
        if not math.isfinite(distance_km) or distance_km < 0:
            raise ZoneInputError(f"distance_km must be finite and >= 0, got {distance_km}")

        for bucket in self.buckets:
            if distance_km < bucket.max_distance_km:
                return bucket.estimate
        return self.fallback

    def to_dict(self) -> Dict[str, Any]:
        return {
            'buckets': [
                {
                    'max_distance_km': b.max_distance_km,
                    'min_minutes': b.min_minutes,
                    'max_minutes': b.max_minutes,
                }
                for b in self.buckets
            ],
            'fallback': {
                'min_minutes': self.fallback.min_minutes,
                'max_minutes': self.fallback.max_minutes,
            },
        }


# Thresholds used by the storefront delivery map (Ulaanbaatar, central branch)
DEFAULT_TIME_TABLE = DeliveryTimeTable.from_rows(
    [
        (0.5, 15, 20),
        (1.0, 20, 25),
        (1.5, 25, 30),
    ],
    fallback=(30, 35),
)


def estimated_delivery_minutes(
    distance_km: float,
    table: DeliveryTimeTable = DEFAULT_TIME_TABLE,
) -> DeliveryEstimate:
    """Estimate delivery time for a distance using the given table."""
    return table.estimate(distance_km)
