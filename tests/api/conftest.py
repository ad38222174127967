"""API test fixtures — httpx client over ASGITransport bound to the test database.

The app lifespan does not run under ASGITransport, so the fixture wires what the
lifespan would: the EventPipeline on app.state, the get_db dependency and the
module-level db_manager used by the readiness check.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from pool_indexer.infrastructure import database
from pool_indexer.infrastructure.database import get_db
from pool_indexer.main import app
from pool_indexer.services.event_pipeline import EventPipeline


@pytest.fixture
async def client(db_manager, settings, monkeypatch):
    async def override_get_db():
        async with db_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.pipeline = EventPipeline(db_manager, settings)
    monkeypatch.setattr(database, "db_manager", db_manager)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.pipeline = None
