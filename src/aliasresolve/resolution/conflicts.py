"""Conflict detection and candidate selection."""

from __future__ import annotations

from collections.abc import Sequence

from aliasresolve.core.addresses import normalize_chain
from aliasresolve.core.models import ResolvedCandidate
from aliasresolve.core.types import ALL_CHAINS


def detect_conflict(candidates: Sequence[ResolvedCandidate]) -> bool:
    """True iff some currency has two or more candidates with differing addresses.

    Addresses are compared case-insensitively.
    """
    addresses_by_currency: dict[str, set[str]] = {}
    for candidate in candidates:
        addresses = addresses_by_currency.setdefault(normalize_chain(candidate.currency), set())
        addresses.add(candidate.address.lower())
        if len(addresses) > 1:
            return True
    return False


def select_candidate(
    candidates: Sequence[ResolvedCandidate],
    chain: str = ALL_CHAINS,
) -> ResolvedCandidate | None:
    """
    Pick the highest-confidence candidate.

    For a specific chain the pool is first narrowed to that chain's
    candidates, falling back to every candidate when none match. Ties keep
    the earliest candidate, so plugin order decides.
    """
    if not candidates:
        return None

    pool: Sequence[ResolvedCandidate] = candidates
    wanted = normalize_chain(chain)
    if wanted != ALL_CHAINS:
        pool = [c for c in candidates if normalize_chain(c.currency) == wanted] or candidates

    best = pool[0]
    for candidate in pool[1:]:
        if candidate.confidence > best.confidence:
            best = candidate
    return best
