"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - StaticPool: every session shares the single in-memory connection
    - fetch() reads through a NEW session, so assertions see committed state only
"""

import os

# Ensure tests never reach a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

import pytest  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from pool_indexer.config import Settings  # noqa: E402
from pool_indexer.db.base import Base  # noqa: E402
from pool_indexer.infrastructure.database import DatabaseSessionManager  # noqa: E402
import pool_indexer.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def settings():
    return Settings(database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def db_manager(test_session_factory):
    return DatabaseSessionManager.from_session_factory(test_session_factory)


@pytest.fixture
def fetch(test_session_factory):
    """Load one committed row by primary key."""
    async def _fetch(model, record_id):
        async with test_session_factory() as session:
            return await session.get(model, record_id)
    return _fetch


@pytest.fixture
def count(test_session_factory):
    """Count committed rows of a model."""
    async def _count(model):
        async with test_session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return _count


@pytest.fixture
def fetch_all(test_session_factory):
    async def _fetch_all(model):
        async with test_session_factory() as session:
            result = await session.execute(select(model))
            return list(result.scalars().all())
    return _fetch_all
