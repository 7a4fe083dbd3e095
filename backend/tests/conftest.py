"""Root conftest — shared test configuration."""

import os

import pytest

# Tests never touch a real server database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("STORAGE_BACKEND", "sql")
os.environ.setdefault("LOG_FORMAT", "text")

from factories import FixedClock  # noqa: E402


@pytest.fixture
def clock():
    return FixedClock()
