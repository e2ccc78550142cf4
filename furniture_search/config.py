"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_bool(name: str, default: str) -> bool:
    return _get_env(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    catalog_path: str = _get_env("CATALOG_PATH", "catalog.json")
    keywords_path: str = _get_env("KEYWORDS_PATH", "keywords.json")
    search_delay_seconds: float = float(_get_env("SEARCH_DELAY_SECONDS", "0.5"))
    max_search_results: int = int(_get_env("MAX_SEARCH_RESULTS", "20"))
    min_query_length: int = int(_get_env("MIN_QUERY_LENGTH", "2"))
    fuzzy_matching: bool = _get_bool("FUZZY_MATCHING", "true")
    smart_search: bool = _get_bool("SMART_SEARCH", "true")
    cache_backend: str = _get_env("CACHE_BACKEND", "auto")
    redis_host: str = _get_env("REDIS_HOST", "localhost")
    redis_port: int = int(_get_env("REDIS_PORT", "6379"))
    cache_ttl_seconds: int = int(_get_env("CACHE_TTL_SECONDS", "300"))
    cache_max_entries: int = int(_get_env("CACHE_MAX_ENTRIES", "1024"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()
