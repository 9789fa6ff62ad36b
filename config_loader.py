"""Configuration loading utilities for the record search service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from YAML."""

    sources: list[Path]
    host: str = "127.0.0.1"
    port: int = 8000
    default_limit: int = 10
    max_limit: int = 50
    cache_ttl_seconds: float = 60.0


def load_config(config_path: Path) -> AppConfig:
    """Load and validate configuration from a YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as file:
        raw: dict[str, Any] = yaml.safe_load(file) or {}

    sources_raw = raw.get("sources")
    if not isinstance(sources_raw, list) or not sources_raw:
        raise ValueError("'sources' must be a non-empty list in config.yml")

    sources: list[Path] = []
    for value in sources_raw:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Each entry in 'sources' must be a non-empty string")

        candidate = Path(value)
        if not candidate.is_absolute():
            candidate = (config_path.parent / candidate).resolve()
        sources.append(candidate)

    host = raw.get("host", "127.0.0.1")
    port = raw.get("port", 8000)
    default_limit = raw.get("default_limit", 10)
    max_limit = raw.get("max_limit", 50)
    cache_ttl_seconds = raw.get("cache_ttl_seconds", 60.0)

    if not isinstance(host, str) or not host:
        raise ValueError("'host' must be a non-empty string")
    if not _is_int(port) or not (1 <= port <= 65535):
        raise ValueError("'port' must be an integer between 1 and 65535")
    if not _is_int(default_limit) or default_limit < 1:
        raise ValueError("'default_limit' must be a positive integer")
    if not _is_int(max_limit) or max_limit < default_limit:
        raise ValueError("'max_limit' must be an integer not smaller than 'default_limit'")
    if isinstance(cache_ttl_seconds, bool) or not isinstance(cache_ttl_seconds, (int, float)):
        raise ValueError("'cache_ttl_seconds' must be a number")
    if cache_ttl_seconds <= 0:
        raise ValueError("'cache_ttl_seconds' must be positive")

    return AppConfig(
        sources=sources,
        host=host,
        port=port,
        default_limit=default_limit,
        max_limit=max_limit,
        cache_ttl_seconds=float(cache_ttl_seconds),
    )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
