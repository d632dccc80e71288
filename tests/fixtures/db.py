# tests/fixtures/db.py
"""
DB fixtures for tests (async, SQLite in memory):
- StaticPool so every session shares the one in-memory connection
- Tables created fresh for each test and dropped afterwards
- Function-scoped sessions
"""

from typing import AsyncGenerator

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from vidtube.db import base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=StaticPool,
    connect_args={"check_same_thread": False},
)

SessionFactory = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh schema and session per test."""
    async with engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.create_all)

    async with SessionFactory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.drop_all)


@pytest.fixture()
def failing_commit(db_session: AsyncSession, monkeypatch):
    """Call after seeding data: every later `commit()` fails like a lost connection."""
    async def _commit() -> None:
        raise OperationalError("COMMIT", {}, Exception("database is unavailable"))

    def _break() -> None:
        monkeypatch.setattr(db_session, "commit", _commit)

    return _break


def get_override_get_db(session: AsyncSession):
    """FastAPI dependency override using the provided session."""
    async def _override() -> AsyncGenerator[AsyncSession, None]:
        yield session
    return _override


__all__ = ["engine", "SessionFactory", "anyio_backend", "db_session", "failing_commit", "get_override_get_db"]
