"""Async engine, session factory and the per-request session dependency.

Learn: One pooled AsyncEngine per process. Nothing holds a "current
connection": get_db() opens a session for each request and repositories
receive it through their constructor. The CLI borrows sessions from the
same factory.
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pinconnect.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,  # SQL echo in debug mode
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_recycle=settings.db_pool_recycle_seconds,
    pool_pre_ping=True,
)

# Loaded rows stay readable after commit; services return them as schemas.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request, closed afterwards."""
    async with async_session_factory() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections (app shutdown, end of a CLI command)."""
    await engine.dispose()
