"""
Location Layer
==============

Bounded Context: Turning location sources into one resolved sample.

Responsibilities:
- Sample representation with display metadata (LocationSample)
- Source adapters (static, provider callable, district lookup)
- Prioritized fallback (LocationResolver)
- NO zone evaluation, NO network calls
"""

from pizza_zone.location.sources import (
    SourceKind,
    LocationSample,
    LocationSource,
    StaticLocationSource,
    CallableLocationSource,
    DistrictLookupSource,
    gazetteer_from_pairs,
)
from pizza_zone.location.resolver import (
    AttemptOutcome,
    ResolutionAttempt,
    Resolution,
    LocationResolver,
)

__all__ = [
    "SourceKind",
    "LocationSample",
    "LocationSource",
    "StaticLocationSource",
    "CallableLocationSource",
    "DistrictLookupSource",
    "gazetteer_from_pairs",
    "AttemptOutcome",
    "ResolutionAttempt",
    "Resolution",
    "LocationResolver",
]
