"""Service test fixtures — entity store, transaction context and event pipeline.

Database fixtures (engine, session factory, fetch/count helpers) live in the
root conftest.
"""

import pytest

from pool_indexer.core.transaction_context import TransactionContext
from pool_indexer.services.entity_store import EntityStore
from pool_indexer.services.event_pipeline import EventPipeline


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db, settings):
    return EntityStore(test_db, settings)


@pytest.fixture
def context():
    return TransactionContext()


@pytest.fixture
def pipeline(db_manager, settings):
    return EventPipeline(db_manager, settings)
