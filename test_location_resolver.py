"""
Test Location Resolver
======================

Source adapters and the prioritized fallback chain.

Usage:
    pytest test_location_resolver.py
"""

from datetime import datetime, timedelta, timezone

import pytest

from pizza_zone import (
    CallableLocationSource,
    DistrictLookupSource,
    GeoPoint,
    LocationResolver,
    LocationSample,
    LocationUnavailableError,
    SourceKind,
    StaticLocationSource,
    ZoneInputError,
)
from pizza_zone.location import AttemptOutcome, gazetteer_from_pairs


NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)

DISTRICTS = gazetteer_from_pairs({
    "сүхбаатар": [47.9184, 106.9177],
    "баянзүрх": [47.9084, 106.9377],
})


def fixed_clock():
    return NOW


def unavailable():
    raise LocationUnavailableError("permission denied")


def sample_at(lat, lng, age_s=0.0, kind=SourceKind.DEVICE):
    return LocationSample(
        point=GeoPoint(lat, lng),
        source=kind,
        captured_at=NOW - timedelta(seconds=age_s),
    )


# ─────────────────────────────────────────────────────────────────────────────
# Sources
# ─────────────────────────────────────────────────────────────────────────────

def test_callable_source_with_accuracy():
    source = CallableLocationSource("gps", SourceKind.DEVICE, lambda: (47.92, 106.91, 12.5), clock=fixed_clock)
    sample = source.locate()

    assert sample.point == GeoPoint(47.92, 106.91)
    assert sample.source == SourceKind.DEVICE
    assert sample.accuracy_m == 12.5
    assert sample.captured_at == NOW


def test_callable_source_without_fix():
    source = CallableLocationSource("gps", SourceKind.DEVICE, lambda: None)
    assert source.locate() is None


def test_district_lookup_is_case_insensitive():
    lookup = DistrictLookupSource(DISTRICTS)
    district, point = lookup.match("СҮХБААТАР дүүрэг, 1-р хороо")

    assert district == "сүхбаатар"
    assert point == GeoPoint(47.9184, 106.9177)


def test_district_lookup_first_configured_match_wins():
    lookup = DistrictLookupSource(DISTRICTS)
    district, _ = lookup.match("Баянзүрх, near Сүхбаатар square")
    assert district == "сүхбаатар"


@pytest.mark.parametrize("address", ["", "   ", "Darkhan city"])
def test_district_lookup_no_match(address):
    assert DistrictLookupSource(DISTRICTS, address=address).locate() is None


def test_district_lookup_sample_metadata():
    sample = DistrictLookupSource(DISTRICTS).for_address("  Баянзүрх 3-р хороо ").locate()

    assert sample.source == SourceKind.MANUAL
    assert sample.address == "Баянзүрх 3-р хороо"
    assert sample.point == GeoPoint(47.9084, 106.9377)


def test_sample_age():
    sample = sample_at(47.9, 106.9, age_s=90)
    assert sample.age_s(NOW) == pytest.approx(90.0)
    assert sample.to_dict()['source'] == "device"


# ─────────────────────────────────────────────────────────────────────────────
# Resolver
# ─────────────────────────────────────────────────────────────────────────────

def test_first_source_wins_and_later_sources_are_not_called():
    calls = []

    def estimate():
        calls.append("estimate")
        return (47.0, 106.0)

    resolver = LocationResolver([
        StaticLocationSource(sample_at(47.92, 106.91), name="gps"),
        CallableLocationSource("ip", SourceKind.ESTIMATE, estimate),
    ])
    resolution = resolver.resolve()

    assert resolution.resolved
    assert resolution.sample.point == GeoPoint(47.92, 106.91)
    assert [a.outcome for a in resolution.attempts] == [AttemptOutcome.RESOLVED]
    assert calls == []


def test_fallback_chain_skips_failures_in_order():
    resolver = LocationResolver([
        CallableLocationSource("gps", SourceKind.DEVICE, unavailable),
        CallableLocationSource("bad_bridge", SourceKind.DEVICE, lambda: (123.0, 106.9)),
        CallableLocationSource("empty", SourceKind.DEVICE, lambda: None),
        DistrictLookupSource(DISTRICTS, address="Сүхбаатар"),
    ])
    resolution = resolver.resolve()

    assert resolution.resolved
    assert resolution.sample.source == SourceKind.MANUAL
    assert [(a.source, a.outcome) for a in resolution.attempts] == [
        ("gps", AttemptOutcome.UNAVAILABLE),
        ("bad_bridge", AttemptOutcome.INVALID),
        ("empty", AttemptOutcome.EMPTY),
        ("district_lookup", AttemptOutcome.RESOLVED),
    ]
    assert resolution.attempts[0].detail == "permission denied"


def test_malformed_provider_result_is_invalid():
    resolver = LocationResolver([CallableLocationSource("odd", SourceKind.ESTIMATE, lambda: (47.9,))])
    resolution = resolver.resolve()

    assert not resolution.resolved
    assert resolution.attempts[0].outcome == AttemptOutcome.INVALID


def test_stale_samples_are_skipped():
    resolver = LocationResolver(
        [
            StaticLocationSource(sample_at(47.92, 106.91, age_s=600), name="cached_gps"),
            StaticLocationSource(sample_at(47.93, 106.92, age_s=10), name="fresh_gps"),
        ],
        max_age_s=300,
        clock=fixed_clock,
    )
    resolution = resolver.resolve()

    assert resolution.sample.point == GeoPoint(47.93, 106.92)
    assert resolution.attempts[0].outcome == AttemptOutcome.STALE


def test_sample_rejects_naive_timestamp():
    with pytest.raises(ZoneInputError, match="timezone-aware"):
        LocationSample(
            point=GeoPoint(47.92, 106.91),
            source=SourceKind.DEVICE,
            captured_at=datetime(2026, 10, 19, 12, 0, 0),
        )


def test_naive_provider_clock_is_invalid_not_fatal():
    resolver = LocationResolver(
        [
            CallableLocationSource(
                "gps", SourceKind.DEVICE, lambda: (47.92, 106.91),
                clock=lambda: datetime(2026, 10, 19, 12, 0, 0),
            ),
            DistrictLookupSource(DISTRICTS, address="Сүхбаатар"),
        ],
        max_age_s=300,
        clock=fixed_clock,
    )
    resolution = resolver.resolve()

    assert resolution.sample.source == SourceKind.MANUAL
    assert resolution.attempts[0].outcome == AttemptOutcome.INVALID


def test_no_max_age_accepts_old_samples():
    resolver = LocationResolver(
        [StaticLocationSource(sample_at(47.92, 106.91, age_s=86400))],
        clock=fixed_clock,
    )
    assert resolver.resolve().resolved


def test_all_sources_fail():
    resolver = LocationResolver([
        CallableLocationSource("gps", SourceKind.DEVICE, unavailable),
        DistrictLookupSource(DISTRICTS, address="nowhere"),
    ])
    resolution = resolver.resolve()

    assert not resolution.resolved
    assert resolution.sample is None
    assert len(resolution.attempts) == 2


def test_empty_source_list():
    resolution = LocationResolver([]).resolve()
    assert not resolution.resolved
    assert resolution.attempts == []


def test_invalid_max_age():
    with pytest.raises(ValueError):
        LocationResolver([], max_age_s=0)
