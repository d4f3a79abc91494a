"""
Core pytest configuration for the entire test suite.

This module provides only the database setup and logging bootstrap that every
kind of test needs (repositories, drivers, API, logging).

Domain-specific fixtures live in:
- tests/test_fixtures/model_fixtures.py       (seed data factories and the shared scenario)
- tests/test_fixtures/repository_fixtures.py  (driver and repository instances)
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Keep this block before importing messaging.* so model registration and
# engine creation stay quiet during collection.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from messaging.config import Settings
from messaging.core.logging.builder import setup_logging
from messaging.database.base import Base
from messaging import models  # noqa: F401 – import to register models with Base.metadata

# In-memory SQLite shared by every connection of one engine (StaticPool).
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings used by the whole suite, built explicitly so the tests do not
    depend on a .env file or a running Postgres.
    """
    return Settings(
        ENV="testing",
        DATABASE_URL=TEST_DATABASE_URL,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
        LOG_TO_STDOUT=True,
        ENABLE_SQL_LOGGING=False,
    )


@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """
    Install the application's dictConfig once per session.

    pytest's caplog handler is attached per test, after this runs, so tests
    that assert on records keep working (they raise the level they need with
    caplog.set_level).
    """
    setup_logging(test_settings)
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Fresh in-memory database per test: tables are created on entry and the
    whole database disappears with the engine.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Async session bound to the per-test engine.

    expire_on_commit=False mirrors the application's session maker.
    """
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
        await session.rollback()


# Seed data and repository fixtures, registered globally
from .test_fixtures.model_fixtures import (  # noqa: E402
    seed,
    scenario,
)
from .test_fixtures.repository_fixtures import (  # noqa: E402
    driver,
    conversation_repository,
    participant_repository,
    message_repository,
    tag_repository,
)
