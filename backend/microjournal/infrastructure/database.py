"""Database Session Manager — async engine with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Server connection pools use pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py)
    - Cancellation (asyncio.CancelledError) is never translated — it propagates as-is

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - expire_on_commit=False: prevents lazy-load issues in async context
    - translate_db_error shared with SQLJournalStore so both report the same messages
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from microjournal.core.errors import StorageError
from microjournal.db.base import Base
from microjournal.db.session import create_engine, create_session_factory
import microjournal.models  # noqa: F401

logger = logging.getLogger(__name__)


def translate_db_error(e: SQLAlchemyError, operation: str) -> StorageError:
    """Map a SQLAlchemy exception to StorageError without leaking driver text."""
    if isinstance(e, IntegrityError):
        logger.error(f"DB integrity error: {e}", extra={"operation": operation})
        return StorageError("Integrity constraint violated", operation)
    if isinstance(e, OperationalError):
        logger.error(f"DB operational error: {e}", extra={"operation": operation})
        return StorageError("Connection or operational error", operation)
    if isinstance(e, DBAPIError):
        logger.error(f"DB driver error: {e}", extra={"operation": operation})
        return StorageError("Database driver error", operation)
    logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
    return StorageError("Database operation failed", operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_engine(
            database_url, pool_size=pool_size, max_overflow=max_overflow,
        )
        self._session_factory = create_session_factory(self.engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise translate_db_error(e, "session")
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables (local SQLite); alembic owns migrations elsewhere."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (StorageError, SQLAlchemyError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
