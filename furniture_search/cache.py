"""Search result caching with Redis primary and in-memory fallback."""
from __future__ import annotations

import json
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import redis

from .config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "furniture-search:"


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    def set(self, key: str, value: Dict[str, Any], ttl: int) -> None: ...


@dataclass
class RedisCache:
    client: redis.Redis

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            data = self.client.get(KEY_PREFIX + key)
        except redis.RedisError as exc:  # pragma: no cover - protective
            logger.warning("Redis get failed: %s", exc)
            return None
        if not data:
            return None
        try:
            return json.loads(data)
        except json.JSONDecodeError:
            return None

    def set(self, key: str, value: Dict[str, Any], ttl: int) -> None:
        try:
            self.client.setex(KEY_PREFIX + key, ttl, json.dumps(value))
        except redis.RedisError as exc:  # pragma: no cover - protective
            logger.warning("Redis set failed: %s", exc)


class InMemoryCache:
    """TTL cache bounded to ``maxsize`` entries; the oldest insert is evicted first."""

    def __init__(self, clock=time.monotonic, maxsize: int = settings.cache_max_entries) -> None:
        self._store: OrderedDict[str, tuple[float, Dict[str, Any]]] = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock
        self._maxsize = maxsize

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            value = self._store.get(key)
            if not value:
                return None
            expires_at, payload = value
            if expires_at < self._clock():
                self._store.pop(key, None)
                return None
            return payload

    def set(self, key: str, value: Dict[str, Any], ttl: int) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._store.pop(key, None)
            self._store[key] = (now + ttl, value)
            while len(self._store) > self._maxsize:
                self._store.popitem(last=False)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._store.items() if expires_at < now]
        for key in expired:
            del self._store[key]

    def __len__(self) -> int:
        return len(self._store)


_cache: CacheBackend | None = None


def get_cache() -> CacheBackend | None:
    """Return the process-wide cache, or ``None`` when caching is disabled."""
    global _cache
    backend = settings.cache_backend.lower()
    if backend == "none":
        return None
    if _cache is not None:
        return _cache
    if backend == "memory":
        _cache = InMemoryCache()
        return _cache
    try:
        client = redis.Redis(host=settings.redis_host, port=settings.redis_port, decode_responses=False)
        client.ping()
        logger.info("Using Redis cache at %s:%s", settings.redis_host, settings.redis_port)
        _cache = RedisCache(client)
    except redis.RedisError:
        logger.warning("Redis not available, using in-memory cache")
        _cache = InMemoryCache()
    return _cache
