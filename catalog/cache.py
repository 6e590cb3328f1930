"""Search response cache with Redis primary and in-memory fallback."""
from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import redis

from .config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "catalog-search"
MAX_MEMORY_ENTRIES = 1024

Payload = Dict[str, Any]


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[Payload]: ...

    def set(self, key: str, value: Payload, ttl: int) -> None: ...


def cache_key(kind: str, query: str, *parts: str, generation: int = 0) -> str:
    """Stable key for a search of ``kind``.

    Extra ``parts`` cover filters; ``generation`` changes whenever the loaded
    snapshots are replaced, so entries computed from older data stop matching.
    """
    raw = "\x1f".join((kind, query.strip().lower(), *parts))
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()
    return f"{KEY_PREFIX}:g{generation}:{kind}:{digest}"


@dataclass
class RedisCache:
    client: redis.Redis

    def get(self, key: str) -> Optional[Payload]:
        try:
            data = self.client.get(key)
        except redis.RedisError as exc:
            logger.warning("Redis get %s failed: %s", key, exc)
            return None
        return _decode(key, data) if data else None

    def set(self, key: str, value: Payload, ttl: int) -> None:
        try:
            self.client.setex(key, ttl, json.dumps(value, ensure_ascii=False))
        except redis.RedisError as exc:
            logger.warning("Redis set %s failed: %s", key, exc)


def _decode(key: str, data: bytes | str) -> Optional[Payload]:
    try:
        return json.loads(data)
    except json.JSONDecodeError:
        logger.warning("Dropping undecodable cache entry %s", key)
        return None


class InMemoryCache:
    """Process-local TTL store; expired entries are swept on every write."""

    def __init__(self, max_entries: int = MAX_MEMORY_ENTRIES) -> None:
        self.max_entries = max_entries
        self._store: Dict[str, tuple[float, Payload]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> Optional[Payload]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at < time.time():
                del self._store[key]
                return None
            return payload

    def set(self, key: str, value: Payload, ttl: int) -> None:
        now = time.time()
        with self._lock:
            self._sweep(now)
            if key not in self._store and len(self._store) >= self.max_entries:
                # Evict whatever expires soonest.
                oldest = min(self._store, key=lambda k: self._store[k][0])
                del self._store[oldest]
            self._store[key] = (now + ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def _sweep(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._store.items() if expires_at < now]
        for key in expired:
            del self._store[key]


_cache: CacheBackend | None = None


def _connect_redis() -> Optional[redis.Redis]:
    client = redis.Redis(host=settings.redis_host, port=settings.redis_port, decode_responses=False)
    try:
        client.ping()
    except redis.RedisError as exc:
        logger.warning("Redis at %s:%s not available (%s), using in-memory cache", settings.redis_host, settings.redis_port, exc)
        return None
    logger.info("Using Redis cache at %s:%s", settings.redis_host, settings.redis_port)
    return client


def get_cache() -> CacheBackend:
    global _cache
    if _cache is None:
        client = _connect_redis()
        _cache = RedisCache(client) if client is not None else InMemoryCache()
    return _cache


def reset_cache(backend: CacheBackend | None = None) -> None:
    """Replace the process-wide backend (``None`` reconnects to Redis on next use)."""
    global _cache
    _cache = backend
