"""Async Engine & Session Factories — shared by the session manager, scripts and test fixtures.

Invariants:
    - SQLite URLs never receive pool sizing arguments (single-file engine)
    - Sessions never expire attributes on commit

Design Decisions:
    - Separate from infrastructure/database.py: test fixtures and alembic need raw
      factories without the FastAPI-facing singleton
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def create_engine(
    database_url: str, pool_size: int = 20, max_overflow: int = 10, **kwargs,
) -> AsyncEngine:
    """Create an async engine; pool options apply to server databases only."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, **kwargs)
    return create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
        **kwargs,
    )


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
