"""Service test fixtures — async DB, store bundles for both backends, FastAPI client.

Invariants:
    - Every test gets a fresh in-memory SQLite database and a fresh data directory
    - `stores` is parametrized: each service test runs against SQL and JSON files
    - get_stores and get_clock dependencies are overridden for route tests

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for service tests
      (PostgreSQL-specific features are not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from app.core.entities import Role
from app.db.base import Base
import app.models  # noqa: F401
from app.services.stores import build_json_stores, build_sql_stores


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def sql_stores(test_db):
    return build_sql_stores(test_db)


@pytest.fixture
def json_stores(tmp_path):
    return build_json_stores(tmp_path / "data")


@pytest.fixture(params=["sql", "json"])
def stores(request):
    return request.getfixturevalue(f"{request.param}_stores")


@pytest.fixture
async def seeded_roles(stores):
    """employee=1, ld=2, admin=3."""
    roles = [Role(name="employee"), Role(name="ld"), Role(name="admin")]
    for role in roles:
        await stores.roles.insert(role)
    await stores.commit()
    return {r.name: r.id for r in roles}
