"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources (the outbound HTTP client).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from __future__ import annotations

import httpx

from infrastructure.settings import get_settings

_http_client: httpx.AsyncClient | None = None


def create_http_client() -> httpx.AsyncClient:
    """Create the outbound HTTP client used for provider calls.

    No timeout is applied unless DIRSYNC_HTTP_TIMEOUT_SECONDS is set.
    """
    settings = get_settings()
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))


def get_http_client() -> httpx.AsyncClient:
    """Get the application-scoped HTTP client (FastAPI dependency).

    Created lazily so that routes work without the lifespan in tests.
    """
    global _http_client
    if _http_client is None or _http_client.is_closed:
        _http_client = create_http_client()
    return _http_client


async def close_http_client() -> None:
    """Close the shared HTTP client on shutdown."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
