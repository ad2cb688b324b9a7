"""Fixtures for HTTP route tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from clients.application.services import (
    ClientGroupService,
    ClientService,
    UserClientAssociationService,
)
from infrastructure.settings import Environment, Settings, get_settings


@pytest.fixture
def mock_client_service() -> AsyncMock:
    return AsyncMock(spec=ClientService)


@pytest.fixture
def mock_group_service() -> AsyncMock:
    return AsyncMock(spec=ClientGroupService)


@pytest.fixture
def mock_association_service() -> AsyncMock:
    return AsyncMock(spec=UserClientAssociationService)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment=Environment.PRODUCTION)


@pytest.fixture
def test_client(
    settings: Settings,
    mock_client_service: AsyncMock,
    mock_group_service: AsyncMock,
    mock_association_service: AsyncMock,
) -> TestClient:
    """Create TestClient with mocked services.

    Production settings by default, so requests without a tenant are
    rejected instead of falling back to the development tenant.
    """
    from clients.dependencies.association import get_association_service
    from clients.dependencies.client import get_client_service
    from clients.dependencies.client_group import get_client_group_service
    from main import create_app

    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_client_service] = lambda: mock_client_service
    app.dependency_overrides[get_client_group_service] = lambda: mock_group_service
    app.dependency_overrides[get_association_service] = (
        lambda: mock_association_service
    )

    return TestClient(app)
