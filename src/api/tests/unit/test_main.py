"""Unit tests for main FastAPI application configuration.

Covers environment dependent docs, CORS, the 400 mapping of request
validation errors and the lifespan wiring of the initialization consumer.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from infrastructure.settings import Environment, MessageBusSettings, Settings


@pytest.fixture
def development() -> Settings:
    return Settings(environment=Environment.DEVELOPMENT)


@pytest.fixture
def production() -> Settings:
    return Settings(environment=Environment.PRODUCTION)


class TestHealth:
    def test_health_returns_ok(self, production: Settings) -> None:
        from main import create_app

        response = TestClient(create_app(production)).get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "ok"}


class TestApiDocs:
    def test_docs_served_in_development(self, development: Settings) -> None:
        from main import create_app

        client = TestClient(create_app(development))

        assert client.get("/docs").status_code == status.HTTP_200_OK
        schema = client.get("/openapi.json").json()
        assert "/clients" in schema["paths"]
        assert "/groups/{group_id}/clients/{client_id}" in schema["paths"]

    def test_docs_hidden_in_production(self, production: Settings) -> None:
        from main import create_app

        client = TestClient(create_app(production))

        assert client.get("/docs").status_code == status.HTTP_404_NOT_FOUND
        assert client.get("/openapi.json").status_code == status.HTTP_404_NOT_FOUND


class TestCors:
    def test_configured_origin_allowed(self) -> None:
        from main import create_app

        settings = Settings(cors_origins=["https://app.example.com"])
        client = TestClient(create_app(settings))

        response = client.options(
            "/health",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert (
            response.headers["access-control-allow-origin"]
            == "https://app.example.com"
        )

    def test_no_cors_headers_without_origins(self, production: Settings) -> None:
        from main import create_app

        client = TestClient(create_app(production))

        response = client.get("/health", headers={"Origin": "https://evil.test"})

        assert "access-control-allow-origin" not in response.headers


class TestValidationErrors:
    def test_invalid_body_returns_400(self, production: Settings) -> None:
        from clients.application.services import ClientService
        from clients.dependencies.client import get_client_service
        from main import create_app

        app = create_app(production)
        service = AsyncMock(spec=ClientService)
        app.dependency_overrides[get_client_service] = lambda: service

        response = TestClient(app).post(
            "/clients",
            json={"company_name": "Atlas", "ice_number": "not-an-ice"},
            headers={"X-Tenant-ID": "tenant-a"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert isinstance(response.json()["detail"], list)
        service.create_client.assert_not_awaited()


class TestSettingsOverride:
    def test_request_dependencies_use_the_given_settings(
        self, production: Settings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from clients.application.services import ClientService
        from clients.dependencies.client import get_client_service
        from main import create_app

        monkeypatch.setenv("CLIENTS_ENVIRONMENT", "development")
        app = create_app(production)
        service = AsyncMock(spec=ClientService)
        app.dependency_overrides[get_client_service] = lambda: service

        response = TestClient(app).get("/clients")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        service.list_clients.assert_not_awaited()


class TestLifespan:
    def test_consumer_not_started_when_bus_disabled(
        self, production: Settings
    ) -> None:
        import main

        probe = MagicMock()
        with (
            patch.object(main, "DefaultStartupProbe", return_value=probe),
            patch.object(
                main,
                "get_message_bus_settings",
                return_value=MessageBusSettings(enabled=False),
            ),
            patch.object(main, "build_initialization_consumer") as build,
        ):
            app = main.create_app(production)
            with TestClient(app) as client:
                assert client.get("/health").status_code == status.HTTP_200_OK

        build.assert_not_called()
        probe.message_bus_disabled.assert_called_once()
        probe.application_stopped.assert_called_once()

    def test_consumer_started_and_stopped(self, production: Settings) -> None:
        import main

        probe = MagicMock()
        consumer = MagicMock()
        consumer.start = AsyncMock()
        consumer.stop = AsyncMock()
        consumer.stream = "client-management.InitializeClientManagement"
        bus = MessageBusSettings(enabled=True, consumer_group="cm-group")

        with (
            patch.object(main, "DefaultStartupProbe", return_value=probe),
            patch.object(main, "get_message_bus_settings", return_value=bus),
            patch.object(main, "get_redis_client"),
            patch.object(main, "close_redis_client", new=AsyncMock()),
            patch.object(
                main, "build_initialization_consumer", return_value=consumer
            ),
        ):
            app = main.create_app(production)
            with TestClient(app):
                consumer.start.assert_awaited_once()

        consumer.stop.assert_awaited_once()
        probe.initialization_consumer_started.assert_called_once_with(
            "client-management.InitializeClientManagement", "cm-group"
        )

    def test_cleanup_runs_when_consumer_stop_fails(
        self, production: Settings
    ) -> None:
        import main

        probe = MagicMock()
        consumer = MagicMock()
        consumer.start = AsyncMock()
        consumer.stop = AsyncMock(side_effect=RuntimeError("consumer crashed"))
        consumer.stream = "client-management.InitializeClientManagement"
        close_redis = AsyncMock()
        close_database = AsyncMock()

        with (
            patch.object(main, "DefaultStartupProbe", return_value=probe),
            patch.object(
                main,
                "get_message_bus_settings",
                return_value=MessageBusSettings(enabled=True),
            ),
            patch.object(main, "get_redis_client"),
            patch.object(main, "close_redis_client", new=close_redis),
            patch.object(main, "close_database_connections", new=close_database),
            patch.object(
                main, "build_initialization_consumer", return_value=consumer
            ),
        ):
            app = main.create_app(production)
            with pytest.raises(RuntimeError, match="consumer crashed"):
                with TestClient(app):
                    pass

        consumer.stop.assert_awaited_once()
        close_redis.assert_awaited_once()
        close_database.assert_awaited_once()
        probe.application_stopped.assert_called_once()
