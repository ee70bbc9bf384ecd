"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Tests are skipped
when the database cannot be reached.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import directory.infrastructure.models  # noqa: F401  registers tables on Base
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings

TABLES = ("employees", "groups", "integrations")


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        DIRSYNC_DB_HOST, DIRSYNC_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("DIRSYNC_DB_HOST", "localhost"),
        port=int(os.getenv("DIRSYNC_DB_PORT", "5432")),
        database=os.getenv("DIRSYNC_DB_DATABASE", "dirsync_test"),
        username=os.getenv("DIRSYNC_DB_USERNAME", "dirsync"),
        password=SecretStr(os.getenv("DIRSYNC_DB_PASSWORD", "dirsync_dev_password")),
    )


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Engine with the schema created; skips when PostgreSQL is unreachable."""
    engine = create_engine(integration_db_settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OperationalError, OSError) as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL not available: {e}")

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session over clean directory tables."""
    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)

    async with sessionmaker() as session:
        await _truncate(session)
        yield session
        await session.rollback()
        await _truncate(session)


async def _truncate(session: AsyncSession) -> None:
    async with session.begin():
        await session.execute(text(f"TRUNCATE {', '.join(TABLES)} CASCADE"))
