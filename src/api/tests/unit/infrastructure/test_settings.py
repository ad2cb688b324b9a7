"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    DatabaseSettings,
    Environment,
    MessageBusSettings,
    Settings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections
        assert settings.pool_max_connections <= 20

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_max_equal_to_min_is_valid(self):
        settings = DatabaseSettings(pool_min_connections=5, pool_max_connections=5)
        assert settings.pool_min_connections == 5
        assert settings.pool_max_connections == 5

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)


class TestDatabaseSettingsTenantCopy:
    def test_for_database_swaps_only_the_name(self):
        settings = DatabaseSettings(host="db", username="svc", database="main")

        tenant = settings.for_database("tenant_acme")

        assert tenant.database == "tenant_acme"
        assert tenant.host == "db"
        assert tenant.username == "svc"
        assert settings.database == "main"

    def test_connection_string_omits_password(self):
        settings = DatabaseSettings(
            host="db", username="svc", database="main", password="secret"
        )

        assert settings.connection_string == "postgresql://svc@db:5432/main"
        assert "secret" not in settings.connection_string


class TestMessageBusSettings:
    def test_stream_name_uses_prefix(self):
        settings = MessageBusSettings(stream_prefix="cm")

        assert settings.stream_name("ClientCreated") == "cm.ClientCreated"

    def test_claim_idle_has_floor(self):
        with pytest.raises(ValidationError):
            MessageBusSettings(claim_idle_ms=10)

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CLIENTS_BUS_ENABLED", "false")
        monkeypatch.setenv("CLIENTS_BUS_MAX_DELIVERIES", "7")

        settings = MessageBusSettings()

        assert settings.enabled is False
        assert settings.max_deliveries == 7


class TestApplicationSettings:
    def test_development_by_default(self, monkeypatch):
        monkeypatch.delenv("CLIENTS_ENVIRONMENT", raising=False)

        settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.is_development is True
        assert settings.default_tenant_id == "default-tenant"
        assert settings.default_actor == "dev-user"

    def test_production_from_environment(self, monkeypatch):
        monkeypatch.setenv("CLIENTS_ENVIRONMENT", "production")

        assert Settings().is_development is False

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(environment="staging")

    def test_cors_origins_from_json(self, monkeypatch):
        monkeypatch.setenv(
            "CLIENTS_CORS_ORIGINS", '["https://app.example.com"]'
        )

        assert Settings().cors_origins == ["https://app.example.com"]
