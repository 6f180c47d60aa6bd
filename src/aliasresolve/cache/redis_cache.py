"""Redis-backed cache for resolution outcomes."""

from __future__ import annotations

import json
import logging
from typing import Any

import redis.asyncio as aioredis

from aliasresolve.cache.keys import CacheKeys
from aliasresolve.core.exceptions import CacheError
from aliasresolve.core.types import ALL_CHAINS

logger = logging.getLogger(__name__)


class RedisResultCache:
    """Async Redis cache with JSON serialization.

    Redis expires keys itself, so ``cleanup()`` has nothing to do.
    """

    def __init__(self, redis_url: str, default_ttl: int = 300) -> None:
        self._redis_url = redis_url
        self.default_ttl = default_ttl
        self._pool: aioredis.ConnectionPool | None = None
        self._redis: aioredis.Redis | None = None

    async def connect(self) -> None:
        """Connect to Redis."""
        self._pool = aioredis.ConnectionPool.from_url(
            self._redis_url,
            max_connections=20,
            decode_responses=True,
        )
        self._redis = aioredis.Redis(connection_pool=self._pool)

    async def close(self) -> None:
        """Close the Redis connection."""
        if self._redis:
            await self._redis.aclose()
        if self._pool:
            await self._pool.disconnect()
        self._redis = None
        self._pool = None

    @property
    def redis(self) -> aioredis.Redis:
        if self._redis is None:
            raise CacheError("Redis cache is not connected")
        return self._redis

    async def get(self, alias: str, chain: str = ALL_CHAINS) -> dict[str, Any] | None:
        """Get a cached payload."""
        key = CacheKeys.resolution(alias, chain)
        value = await self.redis.get(key)
        if value is None:
            return None
        try:
            payload = json.loads(value)
        except json.JSONDecodeError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            await self.redis.delete(key)
            return None
        logger.debug(f"Cache hit for {key}")
        return payload

    async def set(
        self,
        alias: str,
        payload: dict[str, Any],
        chain: str = ALL_CHAINS,
        ttl: int | None = None,
    ) -> None:
        """Set a payload with TTL."""
        key = CacheKeys.resolution(alias, chain)
        serialized = json.dumps(payload, default=str)
        await self.redis.set(key, serialized, ex=ttl if ttl is not None else self.default_ttl)

    async def clear(self, alias: str, chain: str = ALL_CHAINS) -> bool:
        """Delete one entry."""
        result = await self.redis.delete(CacheKeys.resolution(alias, chain))
        return result > 0

    async def clear_all(self) -> None:
        """Delete every resolution entry by key prefix."""
        keys = [key async for key in self.redis.scan_iter(match=CacheKeys.resolution_pattern())]
        if keys:
            await self.redis.delete(*keys)

    async def cleanup(self) -> int:
        return 0

    async def stats(self) -> dict[str, Any]:
        count = 0
        async for _ in self.redis.scan_iter(match=CacheKeys.resolution_pattern()):
            count += 1
        return {"backend": "redis", "entries": count}

    async def __aenter__(self) -> "RedisResultCache":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
