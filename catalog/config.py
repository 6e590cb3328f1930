"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_flag(name: str, default: str) -> bool:
    return _get_env(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    inventory_path: str = _get_env("INVENTORY_PATH", "data/inventory.json")
    inventory_source_url: str = _get_env("INVENTORY_SOURCE_URL", "")
    points_path: str = _get_env("POINTS_PATH", "data/points.json")
    points_source_url: str = _get_env("POINTS_SOURCE_URL", "")
    content_filter: str = _get_env("CONTENT_FILTER", "Товар")
    redis_host: str = _get_env("REDIS_HOST", "localhost")
    redis_port: int = int(_get_env("REDIS_PORT", "6379"))
    cache_ttl_seconds: int = int(_get_env("CACHE_TTL_SECONDS", "300"))
    cache_enabled: bool = _get_flag("CACHE_ENABLED", "true")
    search_result_size: int = int(_get_env("SEARCH_RESULT_SIZE", "100"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()
