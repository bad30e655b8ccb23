"""Root conftest: shared test configuration and in-memory store fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the users table
    - DATABASE_URL points at SQLite so Settings() never reaches a real server

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency, exercises the
      same ORM statements the service issues against PostgreSQL
"""

import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

from users_api.db.base import Base  # noqa: E402
import users_api.models  # noqa: E402,F401


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
