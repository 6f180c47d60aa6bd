"""Verification service: runs proofs and persists them on the alias record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from aliasresolve.core.exceptions import NotFoundError, ValidationError
from aliasresolve.core.models import TrustReport, VerificationResult
from aliasresolve.core.types import VerificationMethod
from aliasresolve.verification.report import build_trust_report

if TYPE_CHECKING:
    from aliasresolve.db.store import AliasStore
    from aliasresolve.verification.engine import VerificationEngine

logger = logging.getLogger(__name__)


class VerificationService:
    """Ownership verification and trust reports for stored aliases."""

    def __init__(self, engine: "VerificationEngine", store: "AliasStore | None" = None) -> None:
        self._engine = engine
        self._store = store

    async def verify_ownership(
        self,
        alias_id: UUID | None,
        domain: str,
        method: VerificationMethod | str,
        expected: dict[str, str],
    ) -> VerificationResult:
        """
        Verify a domain's proofs and store the outcome on the alias.

        A failure to persist is reported in ``errors`` rather than raised,
        so the caller still receives the verification itself.
        """
        result = await self._engine.verify(domain, method, expected)

        if alias_id is not None and self._store is not None:
            try:
                await self._store.save_verification(alias_id, result)
            except Exception as e:
                logger.exception(f"Failed to store verification for alias {alias_id}")
                result.errors.append(f"Database update failed: {e}")

        return result

    async def trust_report(
        self,
        alias_id: UUID | None = None,
        domain: str | None = None,
    ) -> TrustReport:
        if alias_id is None and not domain:
            raise ValidationError("Either aliasId or domain is required")
        if self._store is None:
            raise NotFoundError("Alias not found")

        if alias_id is not None:
            alias = await self._store.get_alias(alias_id)
        else:
            alias = await self._store.get_alias_by_string(domain)

        if alias is None:
            raise NotFoundError("Alias not found")
        return build_trust_report(alias)
