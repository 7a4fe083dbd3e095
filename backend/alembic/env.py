"""Alembic environment — applies the training schema using the application's own settings.

Invariants:
    - The target URL is Settings.database_url (DATABASE_URL, already rewritten to
      postgresql+asyncpg://); `alembic -x url=...` overrides it for one run
    - Base.metadata is complete before any comparison: app.models registers every table
    - Online runs use a NullPool async engine that is disposed when the run ends

Design Decisions:
    - No alembic.ini required: logging falls back to setup_logging from the app
    - compare_type on, so column type drift shows up in autogenerate
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

import app.models  # noqa: F401
from app.config import get_settings
from app.db.base import Base
from app.infrastructure.observability import setup_logging

config = context.config
target_metadata = Base.metadata


def _configure_logging() -> None:
    if config.config_file_name is not None:
        fileConfig(config.config_file_name)
        return
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)


def _target_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    return override or get_settings().database_url


def run_migrations_offline(url: str) -> None:
    """Emit the migration SQL for `url` without connecting."""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(
        connection=connection, target_metadata=target_metadata, compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online(url: str) -> None:
    engine = create_async_engine(url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


_configure_logging()
if context.is_offline_mode():
    run_migrations_offline(_target_url())
else:
    asyncio.run(run_migrations_online(_target_url()))
