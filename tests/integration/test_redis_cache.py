"""Integration tests for the Redis result cache."""

from __future__ import annotations

import os

import pytest

from aliasresolve.cache.keys import CacheKeys
from aliasresolve.cache.redis_cache import RedisResultCache
from aliasresolve.core.exceptions import CacheError

pytestmark = pytest.mark.integration

PAYLOAD = {"alias": "vitalik.eth", "chain": "ethereum", "resolved": [], "chosen": None}


@pytest.fixture
def redis_url() -> str:
    """Get test Redis URL from environment or use default."""
    return os.getenv("TEST_REDIS_URL", "redis://localhost:6379/15")


@pytest.fixture
async def redis_cache(redis_url: str):
    """Connected cache on a flushed test database; skipped without Redis."""
    cache = RedisResultCache(redis_url, default_ttl=60)
    await cache.connect()
    try:
        await cache.redis.ping()
    except Exception:
        await cache.close()
        pytest.skip("Redis not available for integration tests")
    await cache.redis.flushdb()
    yield cache
    await cache.redis.flushdb()
    await cache.close()


class TestRedisResultCache:
    """Tests for RedisResultCache."""

    async def test_roundtrip_with_ttl(self, redis_cache: RedisResultCache):
        """Entries are stored as JSON with their TTL."""
        await redis_cache.set("vitalik.eth", PAYLOAD, chain="ethereum", ttl=30)

        assert await redis_cache.get("vitalik.eth", "ethereum") == PAYLOAD
        ttl = await redis_cache.redis.ttl(CacheKeys.resolution("vitalik.eth", "ethereum"))
        assert 0 < ttl <= 30

    async def test_chain_is_part_of_key(self, redis_cache: RedisResultCache):
        await redis_cache.set("vitalik.eth", PAYLOAD, chain="ethereum")
        assert await redis_cache.get("vitalik.eth", "bitcoin") is None

    async def test_undecodable_entry_discarded(self, redis_cache: RedisResultCache):
        """Corrupt entries are treated as misses and removed."""
        key = CacheKeys.resolution("bad.eth", "all")
        await redis_cache.redis.set(key, "{not json")

        assert await redis_cache.get("bad.eth") is None
        assert await redis_cache.redis.exists(key) == 0

    async def test_clear_and_stats(self, redis_cache: RedisResultCache):
        await redis_cache.set("a.eth", PAYLOAD)
        await redis_cache.set("b.eth", PAYLOAD)

        assert (await redis_cache.stats())["entries"] == 2
        assert await redis_cache.clear("a.eth")
        assert not await redis_cache.clear("a.eth")

        await redis_cache.clear_all()
        assert (await redis_cache.stats())["entries"] == 0


async def test_not_connected():
    """Using the cache before connect() fails clearly."""
    with pytest.raises(CacheError):
        await RedisResultCache("redis://localhost:6379/15").get("vitalik.eth")
