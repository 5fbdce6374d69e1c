"""API test fixtures — the FastAPI app wired to the per-test SQLite engine.

Invariants:
    - get_db is overridden, so the lifespan (and the real db_manager) never runs
    - Dependency overrides are cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from microjournal.infrastructure.database import get_db
from microjournal.main import app

@pytest.fixture
async def client(test_session_factory):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

