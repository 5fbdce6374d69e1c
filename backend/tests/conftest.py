"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test that asks for a database gets a fresh in-memory SQLite engine
    - Tables created from Base.metadata, dropped on teardown

Design Decisions:
    - StaticPool: all sessions share the single in-memory connection, so rows
      written through one session are visible to the next
"""

import os

import pytest
from sqlalchemy.pool import StaticPool

# Ensure tests never point at a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

from microjournal.db.base import Base  # noqa: E402
from microjournal.db.session import create_engine, create_session_factory  # noqa: E402
import microjournal.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    engine = create_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
