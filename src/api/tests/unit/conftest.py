"""Unit test fixtures shared across bounded contexts."""

import pytest
from pydantic import SecretStr

from infrastructure.settings import (
    DatabaseSettings,
    get_database_settings,
    get_message_bus_settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Re-read settings for every test so monkeypatched env vars apply."""
    yield
    get_settings.cache_clear()
    get_database_settings.cache_clear()
    get_message_bus_settings.cache_clear()


@pytest.fixture
def mock_db_settings() -> DatabaseSettings:
    """Provide test database settings."""
    return DatabaseSettings(
        host="localhost",
        port=5432,
        database="test_db",
        username="test_user",
        password=SecretStr("test_password"),
        pool_min_connections=2,
        pool_max_connections=10,
    )
