"""
Configuration settings for turtlemaps
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class APIConfig:
    """API endpoints and configuration"""
    # Overpass API (OSM)
    # Options: overpass-api.de (main), lz4.overpass-api.de, z.overpass-api.de
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_query_timeout_s: int = 10  # [timeout:N] clause of the query itself

    # Nominatim (geocoding)
    # Check the provider's usage policy before using their service!
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"

    # How long are you willing to wait?
    geocode_timeout_s: float = 4.0  # Wait for location data (Nominatim)
    map_timeout_s: float = 15.0  # Wait for map data (Overpass)

    # Throttling, shared by every client talking to the same endpoint
    min_request_interval_s: float = 3.0
    max_queue: int = 32

    # Retry is opt-in: 1 attempt means failures propagate immediately
    max_retries: int = 1
    retry_delay: float = 5.0

    # Used for requests, in case the API needs to throttle your usage
    user_agent: str = "turtlemaps/0.1"
    referer: str = "https://www.stvn.us/pages/contact"


@dataclass
class RenderConfig:
    """Output surface settings"""
    width: int = 800
    height: int = 800
    background: str = "rgb(241, 244, 203)"

    # Start and end points further apart than this (output units) are "open"
    # and are never filled
    max_open_distance: float = 0.05

    # Decimal places kept on projected coordinates (None = full precision)
    precision: Optional[int] = 3

    # "svg" or "png"
    format: str = "svg"


@dataclass
class MapConfig:
    """Top-level configuration"""
    # Default zoom level (0 = whole world, 20 = single building)
    default_zoom: int = 15

    # Directory of locally cached map responses
    cache_dir: Optional[str] = None

    api: APIConfig = field(default_factory=APIConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


# Global config instance
config = MapConfig()


def get_config() -> MapConfig:
    """Get global configuration"""
    return config


def validate_config(config: MapConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.default_zoom is None:
        errors.append("default_zoom is required in config but not set")
    elif not 0 <= config.default_zoom <= 20:
        errors.append(f"default_zoom must be between 0 and 20, got {config.default_zoom}")

    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        if not config.api.overpass_url:
            errors.append("api.overpass_url is required but not set")
        if not config.api.nominatim_url:
            errors.append("api.nominatim_url is required but not set")
        if config.api.min_request_interval_s < 0:
            errors.append(f"api.min_request_interval_s must not be negative, got {config.api.min_request_interval_s}")
        if config.api.max_queue < 1:
            errors.append(f"api.max_queue must be at least 1, got {config.api.max_queue}")
        if config.api.max_retries < 1:
            errors.append(f"api.max_retries must be at least 1, got {config.api.max_retries}")
        for name in ("geocode_timeout_s", "map_timeout_s"):
            if getattr(config.api, name) <= 0:
                errors.append(f"api.{name} must be positive, got {getattr(config.api, name)}")

    if config.render is None:
        errors.append("render configuration is required but not set")
    else:
        if config.render.width <= 0 or config.render.height <= 0:
            errors.append(
                f"render size must be positive, got {config.render.width}x{config.render.height}"
            )
        if config.render.max_open_distance < 0:
            errors.append(f"render.max_open_distance must not be negative, got {config.render.max_open_distance}")
        if config.render.format not in ("svg", "png"):
            errors.append(f"render.format must be 'svg' or 'png', got {config.render.format!r}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
