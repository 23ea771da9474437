"""
Async engine and session factory behind ``SqlDocumentStore``.

The driver follows ``DATABASE_URL``: asyncpg for PostgreSQL in
production, aiosqlite for local runs and the test suite.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": False}
    if url.startswith("postgresql"):
        # each store call checks out its own short-lived connection
        options.update(pool_pre_ping=True, pool_size=20, max_overflow=10, pool_recycle=300)
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
