"""Route test fixtures — FastAPI client over an in-memory SQLite store bundle."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.api.dependencies import get_clock, get_stores
from app.db.base import Base
from app.main import app
from app.services.stores import build_sql_stores


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def client(test_session_factory, clock):
    """FastAPI test client with stores and clock dependencies overridden."""
    async def override_get_stores():
        async with test_session_factory() as session:
            yield build_sql_stores(session)

    app.dependency_overrides[get_stores] = override_get_stores
    app.dependency_overrides[get_clock] = lambda: clock

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seed_stores(test_session_factory):
    """Store bundle on its own session, for arranging data before a request."""
    async with test_session_factory() as session:
        yield build_sql_stores(session)
