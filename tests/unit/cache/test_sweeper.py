"""Tests for the background cache sweeper."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

from aliasresolve.cache.sweeper import CacheSweeper


class TestCacheSweeper:
    """Tests for CacheSweeper."""

    async def test_sweep_returns_removed_count(self):
        """A sweep reports how many entries the cache dropped."""
        cache = AsyncMock()
        cache.cleanup.return_value = 3

        assert await CacheSweeper(cache).sweep() == 3
        cache.cleanup.assert_awaited_once()

    async def test_sweep_survives_cache_errors(self):
        """A failing cleanup is logged and counted as nothing removed."""
        cache = AsyncMock()
        cache.cleanup.side_effect = ConnectionError("redis down")

        assert await CacheSweeper(cache).sweep() == 0

    async def test_start_and_stop(self):
        """The background task runs periodically until stopped."""
        cache = AsyncMock()
        cache.cleanup.return_value = 0
        sweeper = CacheSweeper(cache, interval=0.01)

        sweeper.start()
        assert sweeper.running
        await asyncio.sleep(0.05)
        await sweeper.stop()

        assert not sweeper.running
        assert cache.cleanup.await_count >= 1

    async def test_start_is_idempotent(self):
        """Starting twice keeps a single task."""
        sweeper = CacheSweeper(AsyncMock(), interval=60)
        sweeper.start()
        task = sweeper._task
        sweeper.start()
        assert sweeper._task is task
        await sweeper.stop()

    async def test_stop_without_start(self):
        """Stopping an idle sweeper is a no-op."""
        await CacheSweeper(AsyncMock()).stop()
