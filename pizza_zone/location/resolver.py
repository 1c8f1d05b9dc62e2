"""
Location Resolver Module
========================

Prioritized fallback over location sources (device -> manual -> estimate).

Design:
- Sources tried strictly in the given order
- First usable sample wins; the evaluator only sees that sample
- Every attempt is recorded and returned (functional style), the caller
  decides how to log it
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence

from pizza_zone.errors import LocationUnavailableError, ZoneInputError
from pizza_zone.location.sources import LocationSample, LocationSource, _utcnow


class AttemptOutcome(str, Enum):
    RESOLVED = "resolved"
    EMPTY = "empty"              # Source returned None
    UNAVAILABLE = "unavailable"  # Source raised LocationUnavailableError
    INVALID = "invalid"          # Source produced out-of-range coordinates
    STALE = "stale"              # Sample older than max_age_s


@dataclass(frozen=True)
class ResolutionAttempt:
    source: str
    outcome: AttemptOutcome
    detail: Optional[str] = None


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of one resolve() call.

    Attributes:
        sample: First usable sample, None when every source failed
        attempts: One entry per source tried, in order
    """

    sample: Optional[LocationSample]
    attempts: List[ResolutionAttempt] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.sample is not None


class LocationResolver:
    """
    Tries location sources in priority order.

    Usage:
        resolver = LocationResolver([gps, district_lookup, ip_estimate], max_age_s=300)
        resolution = resolver.resolve()
        if resolution.resolved:
            verdict = evaluator.evaluate(resolution.sample.point)
    """

    def __init__(
        self,
        sources: Sequence[LocationSource],
        max_age_s: Optional[float] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if max_age_s is not None and max_age_s <= 0:
            raise ValueError(f"max_age_s must be > 0, got {max_age_s}")

        self.sources = list(sources)
        self.max_age_s = max_age_s
        self.clock = clock

    def resolve(self) -> Resolution:
        attempts: List[ResolutionAttempt] = []

        for source in self.sources:
            try:
                sample = source.locate()
            except LocationUnavailableError as e:
                attempts.append(ResolutionAttempt(source.name, AttemptOutcome.UNAVAILABLE, str(e)))
                continue
            except ZoneInputError as e:
                attempts.append(ResolutionAttempt(source.name, AttemptOutcome.INVALID, str(e)))
                continue

            if sample is None:
                attempts.append(ResolutionAttempt(source.name, AttemptOutcome.EMPTY))
                continue

            if self.max_age_s is not None:
                age = sample.age_s(self.clock())
                if age > self.max_age_s:
                    attempts.append(
                        ResolutionAttempt(
                            source.name,
                            AttemptOutcome.STALE,
                            f"sample age {age:.0f}s exceeds {self.max_age_s:.0f}s",
                        )
                    )
                    continue

            attempts.append(ResolutionAttempt(source.name, AttemptOutcome.RESOLVED))
            return Resolution(sample=sample, attempts=attempts)

        return Resolution(sample=None, attempts=attempts)
