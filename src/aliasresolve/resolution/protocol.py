"""Capability contract every resolver plugin satisfies."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS


@runtime_checkable
class AliasResolver(Protocol):
    """
    A single naming-system lookup strategy.

    ``can_resolve`` is a syntactic check and must not touch the network.
    ``resolve`` returns an empty list for "not found" and for network or
    parse failures; it only raises ``ResolverNotImplementedError``.
    """

    name: str

    def can_resolve(self, alias: str) -> bool: ...

    async def resolve(self, alias: str, chain: str = ALL_CHAINS) -> list[ResolvedCandidate]: ...
