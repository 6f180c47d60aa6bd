"""Unit test fixtures with HTTP mocking and in-memory collaborators."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import respx
from fakes import FakeStore

from aliasresolve.cache.memory import MemoryResultCache
from aliasresolve.resolution.http import HttpFetcher, RateLimitConfig

# ============================================================================
# HTTP Mocking Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Unmatched requests raise, so every upstream call must be mocked.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def rate_limit() -> RateLimitConfig:
    """Rate limits high enough never to delay a test."""
    return RateLimitConfig(
        requests_per_second=1000.0,
        burst_size=50,
        max_429_retries=1,
        backoff_base=0.01,
    )


@pytest.fixture
async def http_client():
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
async def make_fetcher(rate_limit: RateLimitConfig):
    """Factory fixture building fetchers for a named source."""
    fetchers: list[HttpFetcher] = []

    def _make(source: str = "test", **kwargs: Any) -> HttpFetcher:
        kwargs.setdefault("rate_limit", rate_limit)
        kwargs.setdefault("timeout", 2.0)
        fetcher = HttpFetcher(source, **kwargs)
        fetchers.append(fetcher)
        return fetcher

    yield _make

    for fetcher in fetchers:
        await fetcher.close()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def memory_cache() -> MemoryResultCache:
    return MemoryResultCache(default_ttl=300)
