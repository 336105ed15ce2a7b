"""Service test fixtures — async SQLite DB, seeding helpers and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - get_db dependency overridden to use the test DB
    - db_manager patched for background tasks that bypass get_db
    - fetch() reads through a brand-new session, so assertions always see
      committed state rather than a cached identity map

Design Decisions:
    - File database over :memory: so each session gets its own connection and
      commits behave like they do against PostgreSQL
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from tastebud.db.base import Base
from tastebud.infrastructure.database import get_db, DatabaseSessionManager
import tastebud.infrastructure.database as db_module
import tastebud.models  # noqa: F401
from tastebud.models.reward_grant import RewardGrant
from tastebud.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'tastebud.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Patch db_manager for background tasks that use it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seed(test_session_factory):
    """Insert ORM objects in their own committed transaction."""
    async def _seed(*objects):
        async with test_session_factory() as session:
            session.add_all(objects)
            await session.commit()
        return objects
    return _seed


@pytest.fixture
def fetch(test_session_factory):
    """Load one row by primary key through a fresh session."""
    async def _fetch(model, key):
        async with test_session_factory() as session:
            return await session.get(model, key)
    return _fetch


@pytest.fixture
def count_grants(test_session_factory):
    """Number of reward ledger rows for a user (optionally one reason)."""
    async def _count(user_id, reason=None):
        query = select(func.count()).select_from(RewardGrant).where(
            RewardGrant.user_id == user_id,
        )
        if reason is not None:
            query = query.where(RewardGrant.reason == reason.value)
        async with test_session_factory() as session:
            return (await session.execute(query)).scalar_one()
    return _count
