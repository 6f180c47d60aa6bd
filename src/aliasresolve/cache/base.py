"""Result cache contract shared by the memory and Redis backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from aliasresolve.core.types import ALL_CHAINS


@dataclass
class CacheEntry:
    """A cached payload and its absolute expiry on the cache clock."""

    payload: dict[str, Any]
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@runtime_checkable
class ResultCache(Protocol):
    """Time-boxed store of resolution outcomes keyed by (alias, chain)."""

    async def get(self, alias: str, chain: str = ALL_CHAINS) -> dict[str, Any] | None: ...

    async def set(
        self,
        alias: str,
        payload: dict[str, Any],
        chain: str = ALL_CHAINS,
        ttl: int | None = None,
    ) -> None: ...

    async def clear(self, alias: str, chain: str = ALL_CHAINS) -> bool: ...

    async def clear_all(self) -> None: ...

    async def cleanup(self) -> int: ...

    async def stats(self) -> dict[str, Any]: ...
