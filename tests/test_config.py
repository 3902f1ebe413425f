"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from waypoint_tracker.config import AppConfig, TrackerConfig, get_config, reset_config


def test_tracker_defaults():
    config = TrackerConfig()
    assert config.max_points == 15
    assert config.sampling_period_ms == 60_000
    assert config.sample_timeout_ms == 10_000
    assert config.sampling_period_seconds == 60.0


def test_constructor_overrides():
    config = TrackerConfig(max_points=3, sampling_period_ms=500)
    assert config.max_points == 3
    assert config.sampling_period_seconds == 0.5


@pytest.mark.parametrize(
    "kwargs",
    [{"max_points": 0}, {"sampling_period_ms": 0}, {"sample_timeout_ms": -1}],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        TrackerConfig(**kwargs)


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("WPT_TRACKER_MAX_POINTS", "30")
    monkeypatch.setenv("WPT_STORAGE_ROUTE_KEY", "commute")
    monkeypatch.setenv("WPT_LOCATION_SOURCE", "replay")
    reset_config()

    config = get_config()

    assert config.tracker.max_points == 30
    assert config.storage.route_path == tmp_path / "data" / "commute.json"
    assert config.location.source == "replay"


def test_get_config_is_cached():
    assert get_config() is get_config()
    first = get_config()
    reset_config()
    assert get_config() is not first


def test_app_config_aggregates_sections():
    config = AppConfig()
    assert config.storage.route_key == "saved_route"
    assert config.rendering.destination_label == "Destination"
    assert config.observability.level == "INFO"
    assert isinstance(config.rendering.output_path, Path)
