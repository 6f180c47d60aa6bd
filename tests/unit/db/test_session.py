"""Tests for the shared transaction scope."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from aliasresolve.core.exceptions import DatabaseError
from aliasresolve.db.session import DatabaseManager, transaction


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def session_factory(session) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


class TestTransaction:
    """Tests for transaction."""

    async def test_commits_on_success(self, session_factory, session):
        async with transaction(session_factory) as active:
            assert active is session

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    async def test_sqlalchemy_error_becomes_database_error(self, session_factory, session):
        """Driver failures roll back and surface as DatabaseError."""
        with pytest.raises(DatabaseError, match="Database operation failed"):
            async with transaction(session_factory):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()

    async def test_other_errors_pass_through(self, session_factory, session):
        with pytest.raises(ValueError):
            async with transaction(session_factory):
                raise ValueError("bad input")

        session.rollback.assert_awaited_once()


class TestDatabaseManager:
    """Tests for DatabaseManager."""

    def test_from_settings(self, test_settings):
        manager = DatabaseManager.from_settings(test_settings)
        assert manager._database_url == str(test_settings.database_url)
        assert manager._echo is True

    async def test_session_uses_transaction(self, session_factory, session):
        manager = DatabaseManager("postgresql+asyncpg://test@localhost/test")
        manager._session_factory = session_factory

        async with manager.session() as active:
            assert active is session

        session.commit.assert_awaited_once()

    async def test_ping_failure(self, session_factory, session):
        """An unreachable database raises DatabaseError."""
        session.execute.side_effect = OSError("connection refused")
        manager = DatabaseManager("postgresql+asyncpg://test@localhost/test")
        manager._session_factory = session_factory

        with pytest.raises(DatabaseError, match="unreachable"):
            await manager.ping()

    async def test_close_without_engine(self):
        manager = DatabaseManager("postgresql+asyncpg://test@localhost/test")
        await manager.close()
        assert manager._engine is None
