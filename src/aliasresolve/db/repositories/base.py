"""Generic async repository shared by the table-specific repositories."""

from typing import Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aliasresolve.db.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Async CRUD helpers bound to one model class."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> T | None:
        """Get a single row by primary key."""
        return await self._session.get(self.model, id)

    async def list(self, *, offset: int = 0, limit: int = 100) -> Sequence[T]:
        stmt = select(self.model).offset(offset).limit(limit)
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def create(self, entity: T) -> T:
        """Insert a row and refresh server-side defaults."""
        self._session.add(entity)
        await self._session.flush()
        await self._session.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        """Flush pending changes on an attached row."""
        await self._session.flush()
        await self._session.refresh(entity)
        return entity
