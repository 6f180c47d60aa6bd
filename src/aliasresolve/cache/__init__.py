"""Caching layer for resolution outcomes."""

from .base import CacheEntry, ResultCache
from .keys import CacheKeys
from .memory import MemoryResultCache
from .redis_cache import RedisResultCache
from .sweeper import CacheSweeper

__all__ = [
    "CacheEntry",
    "CacheKeys",
    "CacheSweeper",
    "MemoryResultCache",
    "RedisResultCache",
    "ResultCache",
]
