"""Unit tests for the shared outbound HTTP client."""

import httpx
import pytest
import pytest_asyncio

from infrastructure import dependencies
from infrastructure.settings import get_settings


@pytest_asyncio.fixture(autouse=True)
async def _reset_client():
    yield
    await dependencies.close_http_client()
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_client_is_shared():
    assert dependencies.get_http_client() is dependencies.get_http_client()


@pytest.mark.asyncio
async def test_no_timeout_by_default(monkeypatch):
    monkeypatch.delenv("DIRSYNC_HTTP_TIMEOUT_SECONDS", raising=False)
    get_settings.cache_clear()

    client = dependencies.get_http_client()

    assert client.timeout == httpx.Timeout(None)


@pytest.mark.asyncio
async def test_timeout_from_settings(monkeypatch):
    monkeypatch.setenv("DIRSYNC_HTTP_TIMEOUT_SECONDS", "7.5")
    get_settings.cache_clear()

    client = dependencies.get_http_client()

    assert client.timeout == httpx.Timeout(7.5)


@pytest.mark.asyncio
async def test_closed_client_is_recreated():
    first = dependencies.get_http_client()

    await dependencies.close_http_client()

    assert dependencies.get_http_client() is not first
