"""
Engine ownership and the transaction scope shared by every database call.

`transaction` is the only place sessions are committed or rolled back;
`AliasStore` and the health check both go through it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from aliasresolve.core.exceptions import DatabaseError
from aliasresolve.db.base import create_engine, create_session_factory

if TYPE_CHECKING:
    from aliasresolve.config import AliasResolveSettings


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Commit on success, roll back on error.

    SQLAlchemy failures surface as `DatabaseError`; anything else is
    re-raised unchanged after the rollback.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError(f"Database operation failed: {e}") from e
        except Exception:
            await session.rollback()
            raise


class DatabaseManager:
    """Lazily creates the alias database engine and hands out transactions."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self._database_url = database_url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: "AliasResolveSettings") -> "DatabaseManager":
        return cls(str(settings.database_url), echo=settings.debug)

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_engine(self._database_url, self._echo)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = create_session_factory(self.engine)
        return self._session_factory

    def session(self):
        """Transaction scope over this manager's engine."""
        return transaction(self.session_factory)

    async def ping(self) -> None:
        """Round-trip a trivial query; raises `DatabaseError` when unreachable."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except OSError as e:
            raise DatabaseError(f"Database unreachable: {e}") from e

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
