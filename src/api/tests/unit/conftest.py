"""Unit test fixtures with mocked dependencies."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from infrastructure.settings import DatabaseSettings, Settings


@pytest.fixture
def mock_db_settings() -> DatabaseSettings:
    """Provide test database settings."""
    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def settings() -> Settings:
    """Application settings with a fixed public URL and landing page."""
    return Settings(base_url="https://dirsync.test", landing_url="/")


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    return session
