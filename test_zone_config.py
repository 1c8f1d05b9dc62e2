"""
Test Zone Configuration
=======================

YAML loading, defaults, and eager rejection of invalid configuration.

Usage:
    pytest test_zone_config.py
"""

import logging
from pathlib import Path

import pytest
import yaml

from pizza_zone import GeoPoint, ZoneConfigError
from pizza_service import DeliveryZoneConfig


EXAMPLE_CONFIG = Path(__file__).parent / "config" / "pizza_zone" / "zone_config.yaml"


def minimal_config(**overrides):
    data = {
        'zone_id': 'test_zone',
        'restaurant': {'lat': 5.0, 'lng': 5.0},
        'delivery_polygon': [[0, 0], [0, 10], [10, 10], [10, 0]],
    }
    data.update(overrides)
    return data


def write_yaml(tmp_path, data, name="zone.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────

def test_example_config_loads():
    config = DeliveryZoneConfig.from_yaml(EXAMPLE_CONFIG)

    assert config.zone_id == "ub_central"
    assert config.restaurant == GeoPoint(47.9184, 106.9177)
    assert config.restaurant_name == "Central Ulaanbaatar"
    assert len(config.polygon) == 4
    assert len(config.time_table.buckets) == 3
    assert "сүхбаатар" in config.districts
    assert len(config.districts) == 6
    assert config.max_sample_age_s == 300.0


def test_default_matches_example_file():
    assert DeliveryZoneConfig.default().to_dict() == DeliveryZoneConfig.from_yaml(EXAMPLE_CONFIG).to_dict()


def test_to_dict_survives_yaml_dump(tmp_path):
    original = DeliveryZoneConfig.from_yaml(EXAMPLE_CONFIG)
    path = write_yaml(tmp_path, original.to_dict())

    reloaded = DeliveryZoneConfig.from_yaml(path)

    assert reloaded.to_dict() == original.to_dict()
    assert reloaded.polygon == original.polygon


def test_minimal_config_uses_defaults():
    config = DeliveryZoneConfig.from_dict(minimal_config())

    assert dict(config.districts) == {}
    assert config.max_sample_age_s == 300.0
    assert str(config.time_table.estimate(0.1)) == "15-20"


def test_restaurant_as_pair():
    config = DeliveryZoneConfig.from_dict(minimal_config(restaurant=[5.0, 5.0]))
    assert config.restaurant == GeoPoint(5.0, 5.0)
    assert config.restaurant_name == ""


def test_custom_time_table():
    config = DeliveryZoneConfig.from_dict(minimal_config(delivery_times={
        'buckets': [
            {'max_distance_km': 1.0, 'min_minutes': 20, 'max_minutes': 25},
            {'max_distance_km': 3.0, 'min_minutes': 25, 'max_minutes': 35},
        ],
        'fallback': {'min_minutes': 45, 'max_minutes': None},
    }))

    assert str(config.time_table.estimate(2.0)) == "25-35"
    assert str(config.time_table.estimate(9.0)) == "45+"


def test_sample_age_can_be_disabled():
    config = DeliveryZoneConfig.from_dict(minimal_config(location={'max_sample_age_s': None}))
    assert config.max_sample_age_s is None


def test_restaurant_outside_polygon_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="pizza_service.config"):
        DeliveryZoneConfig.from_dict(minimal_config(restaurant={'lat': 20.0, 'lng': 20.0}))

    assert any("outside delivery polygon" in r.getMessage() for r in caplog.records)


# ─────────────────────────────────────────────────────────────────────────────
# Rejection
# ─────────────────────────────────────────────────────────────────────────────

def test_missing_file(tmp_path):
    with pytest.raises(ZoneConfigError, match="not found"):
        DeliveryZoneConfig.from_yaml(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("zone_id: [unclosed\n", encoding="utf-8")

    with pytest.raises(ZoneConfigError, match="Invalid YAML"):
        DeliveryZoneConfig.from_yaml(path)


def test_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.yaml"
    path.write_bytes(b"zone_id: \xff\xfe\n")

    with pytest.raises(ZoneConfigError, match="Cannot read config"):
        DeliveryZoneConfig.from_yaml(path)


def test_directory_instead_of_file(tmp_path):
    with pytest.raises(ZoneConfigError, match="Cannot read config"):
        DeliveryZoneConfig.from_yaml(tmp_path)


def test_null_zone_id_rejected():
    with pytest.raises(ZoneConfigError, match="zone_id"):
        DeliveryZoneConfig.from_dict(minimal_config(zone_id=None))


def test_null_restaurant_name_is_empty():
    config = DeliveryZoneConfig.from_dict(minimal_config(restaurant={'name': None, 'lat': 5.0, 'lng': 5.0}))
    assert config.restaurant_name == ""


def test_districts_are_read_only():
    config = DeliveryZoneConfig.from_yaml(EXAMPLE_CONFIG)

    with pytest.raises(TypeError):
        config.districts["дархан"] = GeoPoint(49.48, 105.96)
    assert "дархан" not in config.districts


def test_config_must_be_mapping(tmp_path):
    path = write_yaml(tmp_path, [1, 2, 3])
    with pytest.raises(ZoneConfigError):
        DeliveryZoneConfig.from_yaml(path)


@pytest.mark.parametrize("field", ["zone_id", "restaurant", "delivery_polygon"])
def test_missing_required_field(field):
    data = minimal_config()
    del data[field]
    with pytest.raises(ZoneConfigError, match=field):
        DeliveryZoneConfig.from_dict(data)


@pytest.mark.parametrize(
    "overrides",
    [
        {'zone_id': ''},
        {'zone_id': ['a']},
        {'restaurant': {'name': 7, 'lat': 5.0, 'lng': 5.0}},
        {'delivery_polygon': [[0, 0], [0, 10]]},
        {'delivery_polygon': [[0, 0], [0, 10], [10]]},
        {'delivery_polygon': [[0, 0], [0, 10], ["x", 10]]},
        {'delivery_polygon': {'a': 1}},
        {'restaurant': {'lat': 95.0, 'lng': 5.0}},
        {'restaurant': {'lat': 5.0}},
        {'restaurant': 'downtown'},
        {'districts': {'центр': [200.0, 5.0]}},
        {'districts': [[1, 2]]},
        {'delivery_times': {'buckets': [], 'fallback': {'min_minutes': 30, 'max_minutes': 35}}},
        {'delivery_times': {'buckets': [{'max_distance_km': 1.0}], 'fallback': {'min_minutes': 30}}},
        {'delivery_times': {'buckets': [{'max_distance_km': 1.0, 'min_minutes': 20, 'max_minutes': 25}]}},
        {'location': {'max_sample_age_s': 0}},
        {'location': {'max_sample_age_s': 'soon'}},
        {'location': [300]},
    ],
)
def test_invalid_config_rejected(overrides):
    with pytest.raises(ZoneConfigError):
        DeliveryZoneConfig.from_dict(minimal_config(**overrides))
