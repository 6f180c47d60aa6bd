"""In-process TTL cache for resolution outcomes."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

from aliasresolve.cache.base import CacheEntry
from aliasresolve.cache.keys import CacheKeys
from aliasresolve.core.types import ALL_CHAINS

logger = logging.getLogger(__name__)


class MemoryResultCache:
    """
    Dictionary-backed cache with per-entry expiry.

    There is no size bound: expired entries are dropped lazily on read and
    in bulk by ``cleanup()``, which ``CacheSweeper`` calls periodically.
    """

    def __init__(
        self,
        default_ttl: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def get(self, alias: str, chain: str = ALL_CHAINS) -> dict[str, Any] | None:
        """Get a cached payload, or None when absent or expired."""
        key = CacheKeys.resolution(alias, chain)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._misses += 1
                return None
            self._hits += 1
        logger.debug(f"Cache hit for {key}")
        return entry.payload

    async def set(
        self,
        alias: str,
        payload: dict[str, Any],
        chain: str = ALL_CHAINS,
        ttl: int | None = None,
    ) -> None:
        """Store a payload for ``ttl`` seconds (default TTL when omitted)."""
        key = CacheKeys.resolution(alias, chain)
        ttl = ttl if ttl is not None else self.default_ttl
        async with self._lock:
            self._entries[key] = CacheEntry(payload=payload, expires_at=self._clock() + ttl)
        logger.debug(f"Cached {key} for {ttl}s")

    async def clear(self, alias: str, chain: str = ALL_CHAINS) -> bool:
        """Remove one entry."""
        key = CacheKeys.resolution(alias, chain)
        async with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear_all(self) -> None:
        """Remove every entry."""
        async with self._lock:
            self._entries.clear()

    async def cleanup(self) -> int:
        """Drop expired entries, returning how many were removed."""
        async with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug(f"Removed {len(expired)} expired cache entries")
        return len(expired)

    async def stats(self) -> dict[str, Any]:
        async with self._lock:
            return {
                "backend": "memory",
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
            }
