# vidtube/db/session.py
from __future__ import annotations

"""
VidTube — Database Engine & Session Dependency

- One async engine/session factory shared by the app.
- `get_async_db` is the FastAPI dependency; tests override it.
"""

from typing import AsyncGenerator, Dict, Any
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vidtube.core.config import settings

logger = logging.getLogger(__name__)

ASYNC_DATABASE_URL: str = settings.ASYNC_DATABASE_URL


def _engine_kwargs(url: str) -> Dict[str, Any]:
    """Pool knobs for server databases; SQLite uses its own pool."""
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 1800,
        "pool_timeout": 30,
        "pool_size": 10,
        "max_overflow": 20,
    }


# ─────────────────────────────────────────────────────────────
# ⚡ ASYNC ENGINE
# ─────────────────────────────────────────────────────────────
async_engine: AsyncEngine = create_async_engine(
    ASYNC_DATABASE_URL,
    echo=settings.DB_ECHO,
    **_engine_kwargs(ASYNC_DATABASE_URL),
)

async_session_maker = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async SQLAlchemy session."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def db_healthcheck() -> bool:
    """SELECT 1 against the engine."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("DB healthcheck failed")
        return False


__all__ = [
    "async_engine",
    "async_session_maker",
    "get_async_db",
    "db_healthcheck",
]
