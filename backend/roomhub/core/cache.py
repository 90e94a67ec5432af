"""Redis-based cache for organization operating hours."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from uuid import UUID

import redis
from redis.exceptions import ConnectionError, RedisError

from roomhub.core.config import settings

logger = logging.getLogger(__name__)

_redis_client: Optional[redis.Redis] = None


class _InMemoryCache:
    """Fallback in-memory cache when Redis is unavailable."""

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self._cache.get(key)

    def set(self, key: str, value: Any, ex: Optional[int] = None) -> None:
        self._cache[key] = value

    def delete(self, key: str) -> None:
        self._cache.pop(key, None)

    def clear(self) -> None:
        self._cache.clear()


def _get_redis_client() -> redis.Redis | _InMemoryCache:
    """Get or create Redis client."""
    global _redis_client

    if _redis_client is None:
        try:
            pool = redis.ConnectionPool.from_url(
                settings.REDIS_CACHE_URL,
                max_connections=50,
                decode_responses=True,
                socket_connect_timeout=1,
            )
            client = redis.Redis(connection_pool=pool)
            client.ping()
            _redis_client = client
            logger.info("Redis cache connected: %s", settings.REDIS_CACHE_URL)
        except (ConnectionError, RedisError) as e:
            logger.warning("Failed to connect to Redis cache: %s. Using in-memory cache.", e)
            return _InMemoryCache()

    return _redis_client


class RedisCache:
    """Redis-based cache with TTL support."""

    def __init__(self, default_ttl: int = 300):
        self.default_ttl = default_ttl
        self._client = _get_redis_client()

    def get(self, key: str) -> Optional[Any]:
        try:
            if isinstance(self._client, _InMemoryCache):
                return self._client.get(key)

            value = self._client.get(key)
            if value is None:
                return None
            try:
                return json.loads(value)
            except (json.JSONDecodeError, TypeError):
                return value
        except (ConnectionError, RedisError) as e:
            logger.warning("Redis cache get error for key %s: %s", key, e)
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        try:
            ttl = ttl or self.default_ttl
            if isinstance(self._client, _InMemoryCache):
                self._client.set(key, value, ex=ttl)
                return
            self._client.setex(key, ttl, json.dumps(value))
        except (ConnectionError, RedisError) as e:
            logger.warning("Redis cache set error for key %s: %s", key, e)

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except (ConnectionError, RedisError) as e:
            logger.warning("Redis cache delete error for key %s: %s", key, e)

    def clear(self) -> None:
        try:
            if isinstance(self._client, _InMemoryCache):
                self._client.clear()
                return
            self._client.flushdb()
        except (ConnectionError, RedisError) as e:
            logger.warning("Redis cache clear error: %s", e)


_cache: Optional[RedisCache] = None


def get_cache() -> RedisCache:
    """Get global cache instance, connecting lazily on first use."""
    global _cache
    if _cache is None:
        _cache = RedisCache(default_ttl=settings.HOURS_CACHE_TTL)
    return _cache


def hours_cache_key(organization_id: UUID | str) -> str:
    return f"org-hours:{organization_id}"


def invalidate_hours_cache(organization_id: UUID | str | None) -> None:
    if organization_id:
        get_cache().delete(hours_cache_key(organization_id))
        logger.debug("Invalidated hours cache for organization %s", organization_id)
