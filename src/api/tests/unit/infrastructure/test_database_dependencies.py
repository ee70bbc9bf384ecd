"""Unit tests for database dependency injection."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_session,
)


@pytest_asyncio.fixture(autouse=True)
async def _dispose_engine():
    yield
    await close_database_connections()


@pytest.mark.asyncio
async def test_get_engine_returns_asyncpg_engine():
    engine = get_engine()

    assert isinstance(engine, AsyncEngine)
    assert engine.url.drivername == "postgresql+asyncpg"


@pytest.mark.asyncio
async def test_engine_is_a_singleton():
    assert get_engine() is get_engine()


@pytest.mark.asyncio
async def test_get_session_yields_session_without_connecting():
    generator = get_session()
    session = await generator.__anext__()

    assert isinstance(session, AsyncSession)
    assert not session.in_transaction()

    await generator.aclose()


@pytest.mark.asyncio
async def test_close_resets_engine():
    first = get_engine()

    await close_database_connections()

    assert get_engine() is not first
