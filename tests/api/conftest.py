"""Fixtures for API tests: the app with use cases swapped for mocked services."""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from stockopname.api.main import app
from stockopname.core.services import (
    AccountService,
    ItemLedgerService,
    LocationCatalogService,
    SessionLifecycleService,
)


@pytest.fixture
def mock_lifecycle() -> AsyncMock:
    return AsyncMock(spec=SessionLifecycleService)


@pytest.fixture
def mock_ledger() -> AsyncMock:
    return AsyncMock(spec=ItemLedgerService)


@pytest.fixture
def mock_catalog() -> AsyncMock:
    return AsyncMock(spec=LocationCatalogService)


@pytest.fixture
def mock_accounts() -> AsyncMock:
    return AsyncMock(spec=AccountService)


@pytest.fixture
async def make_client() -> AsyncGenerator[Callable[[dict], AsyncClient], None]:
    """Build a client with the given dependency overrides; cleans up afterwards."""
    clients: list[AsyncClient] = []

    def factory(overrides: dict) -> AsyncClient:
        app.dependency_overrides.update(overrides)
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()
    app.dependency_overrides.clear()
