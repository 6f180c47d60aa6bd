"""Periodic removal of expired cache entries."""

from __future__ import annotations

import asyncio
import logging

from aliasresolve.cache.base import ResultCache

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Runs ``cache.cleanup()`` every ``interval`` seconds in a background task."""

    def __init__(self, cache: ResultCache, interval: float = 600.0) -> None:
        self._cache = cache
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start sweeping on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="cache-sweeper")

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def sweep(self) -> int:
        """Run one cleanup pass."""
        try:
            removed = await self._cache.cleanup()
        except Exception as e:
            logger.warning(f"Cache cleanup failed: {e}")
            return 0
        if removed:
            logger.info(f"Cache sweep removed {removed} expired entries")
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.sweep()
