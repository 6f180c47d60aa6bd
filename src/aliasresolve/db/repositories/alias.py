"""Alias, alias history and lookup repositories."""

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import func, or_, select

from aliasresolve.db.models.alias import AliasHistoryModel, AliasModel, LookupModel
from aliasresolve.db.repositories.base import BaseRepository


class AliasRepository(BaseRepository[AliasModel]):
    """Repository for registered aliases."""

    model = AliasModel

    async def get_by_alias_string(self, alias_string: str) -> AliasModel | None:
        """Find an alias by its (case-insensitive) alias string."""
        stmt = select(AliasModel).where(
            func.lower(AliasModel.alias_string) == alias_string.strip().lower()
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_due_for_revalidation(
        self,
        cutoff: datetime,
        *,
        limit: int = 50,
    ) -> Sequence[AliasModel]:
        """
        Aliases that were never verified or were last verified before ``cutoff``.

        Never-verified aliases come first, then the stalest.
        """
        stmt = (
            select(AliasModel)
            .where(
                or_(
                    AliasModel.last_verification_at.is_(None),
                    AliasModel.last_verification_at < cutoff,
                )
            )
            .order_by(AliasModel.last_verification_at.asc().nulls_first())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()


class AliasHistoryRepository(BaseRepository[AliasHistoryModel]):
    """Repository for alias resolution history."""

    model = AliasHistoryModel

    async def record(
        self,
        alias_id,
        *,
        source_type: str,
        currency: str,
        address: str,
        confidence: float | None,
        raw_data: dict[str, Any] | None,
        resolved_at: datetime,
    ) -> AliasHistoryModel:
        entry = AliasHistoryModel(
            alias_id=alias_id,
            source_type=source_type,
            currency=currency,
            address=address,
            confidence=confidence,
            raw_data=raw_data,
            resolved_at=resolved_at,
        )
        return await self.create(entry)


class LookupRepository(BaseRepository[LookupModel]):
    """Repository for the resolve request log."""

    model = LookupModel
