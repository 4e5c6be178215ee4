"""Shared plumbing for the SQL repositories.

Learn: Repositories are the only code that talks to SQLAlchemy. Each one
takes the request's AsyncSession in its constructor and commits its own
single-statement writes. Any storage failure is rolled back and re-raised
as StorageError(operation, entity). The original exception stays
attached as __cause__ for the logs, but never leaks to callers.

SQLAlchemy wraps driver errors raised while a statement runs, but not
the ones raised while opening a connection: asyncpg surfaces a refused
or unreachable server as a plain OSError (ConnectionRefusedError,
socket.gaierror) or a TimeoutError, and those pass through untouched.
"""

import asyncio
from contextlib import asynccontextmanager

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pinconnect.errors import StorageError

logger = structlog.get_logger()

STORAGE_EXCEPTIONS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


@asynccontextmanager
async def storage_guard(db: AsyncSession, operation: str, entity: str):
    """Wrap storage calls so driver and connection errors surface as StorageError."""
    try:
        yield
    except STORAGE_EXCEPTIONS as e:
        try:
            await db.rollback()
        except STORAGE_EXCEPTIONS as rollback_error:
            # connection never came up; nothing to roll back
            logger.warning(
                "storage.rollback_failed",
                operation=operation,
                entity=entity,
                error_type=type(rollback_error).__name__,
            )
        logger.error(
            "storage.failure",
            operation=operation,
            entity=entity,
            error_type=type(e).__name__,
            error=str(e),
        )
        raise StorageError(operation, entity) from e
