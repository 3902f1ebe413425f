"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for tracker limits, storage
locations, location sources and rendering defaults.

Configuration can be overridden via environment variables:
- WPT_TRACKER_MAX_POINTS=30
- WPT_TRACKER_SAMPLING_PERIOD_MS=5000
- WPT_STORAGE_DATA_DIR=/var/lib/waypoints
- WPT_LOCATION_SOURCE=replay
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerConfig(BaseSettings):
    """Route tracking limits and timings.

    Environment variables prefixed with WPT_TRACKER_.
    """

    model_config = SettingsConfigDict(env_prefix="WPT_TRACKER_")

    max_points: int = Field(default=15, ge=1)
    sampling_period_ms: int = Field(default=60_000, gt=0)
    sample_timeout_ms: int = Field(default=10_000, gt=0)

    @property
    def sampling_period_seconds(self) -> float:
        """Sampling period in seconds, as schedulers expect it."""
        return self.sampling_period_ms / 1000


class StorageConfig(BaseSettings):
    """Route storage configuration.

    Environment variables prefixed with WPT_STORAGE_.
    """

    model_config = SettingsConfigDict(env_prefix="WPT_STORAGE_")

    backend: Literal["json", "memory"] = "json"
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / ".waypoint_tracker")
    route_key: str = "saved_route"

    @property
    def route_path(self) -> Path:
        """Full path to the stored route record."""
        return self.data_dir / f"{self.route_key}.json"


class PermissionConfig(BaseSettings):
    """Location permission configuration.

    Environment variables prefixed with WPT_PERMISSION_.
    """

    model_config = SettingsConfigDict(env_prefix="WPT_PERMISSION_")

    mode: Literal["consent_file", "always", "never"] = "consent_file"
    consent_key: str = "location_permission"


class LocationConfig(BaseSettings):
    """Location source configuration.

    Environment variables prefixed with WPT_LOCATION_.
    """

    model_config = SettingsConfigDict(env_prefix="WPT_LOCATION_")

    source: Literal["ip", "replay"] = "ip"
    ip_api_url: str = "http://ip-api.com/json/"
    user_agent: str = "waypoint-tracker"
    replay_file: Optional[Path] = None
    replay_loop: bool = False


class RenderingConfig(BaseSettings):
    """Map rendering configuration.

    Environment variables prefixed with WPT_RENDER_.
    """

    model_config = SettingsConfigDict(env_prefix="WPT_RENDER_")

    output_path: Path = Field(default_factory=lambda: Path.cwd() / "route_map.html")
    tiles: str = "OpenStreetMap"
    zoom_start: int = 16
    line_color: str = "blue"
    line_weight: int = 5
    home_label: str = "Home"
    destination_label: str = "Destination"


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with WPT_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="WPT_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.tracker.max_points)
        print(config.storage.route_path)

    Environment variables prefixed with WPT_.
    """

    model_config = SettingsConfigDict(env_prefix="WPT_")

    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    permission: PermissionConfig = Field(default_factory=PermissionConfig)
    location: LocationConfig = Field(default_factory=LocationConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
