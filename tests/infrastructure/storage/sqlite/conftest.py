"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import stockopname.infrastructure.storage.sqlite.connection as conn_module
from stockopname.core.entities import Location, StockOpnameSession, User
from stockopname.infrastructure.storage.sqlite import (
    SQLiteItemStore,
    SQLiteLocationStore,
    SQLiteSessionStore,
    SQLiteUserStore,
    close_pool,
)
from stockopname.infrastructure.storage.sqlite.migrations import initialize_database

T0 = datetime(2024, 1, 15, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Temporary database migrated to the current schema."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)
    return temp_db_path


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def db_pool(initialized_db: Path, mock_settings) -> AsyncGenerator[None, None]:
    """Point the global pool at the migrated temp database."""
    conn_module._pool = None
    mock_settings.storage.db_path = initialized_db

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield
        finally:
            await close_pool()


@pytest.fixture
def location_store(db_pool) -> SQLiteLocationStore:
    return SQLiteLocationStore()


@pytest.fixture
def user_store(db_pool) -> SQLiteUserStore:
    return SQLiteUserStore()


@pytest.fixture
def session_store(db_pool) -> SQLiteSessionStore:
    return SQLiteSessionStore()


@pytest.fixture
def item_store(db_pool) -> SQLiteItemStore:
    return SQLiteItemStore()


@pytest.fixture
async def stored_location(location_store: SQLiteLocationStore) -> Location:
    return await location_store.create_location(
        Location(name="Warehouse A", code="WH-A", description="Main warehouse", created_at=T0, updated_at=T0)
    )


@pytest.fixture
async def stored_user(user_store: SQLiteUserStore) -> User:
    return await user_store.create_user(
        User(
            username="alice",
            email="alice@example.com",
            full_name="Alice Example",
            created_at=T0,
            updated_at=T0,
        ),
        "$2b$04$fakehashfakehashfakehash",
    )


@pytest.fixture
async def stored_session(
    session_store: SQLiteSessionStore,
    stored_location: Location,
    stored_user: User,
) -> StockOpnameSession:
    return await session_store.create_session(
        StockOpnameSession(
            location_id=stored_location.id,
            user_id=stored_user.id,
            session_name="January count",
            started_at=T0,
            created_at=T0,
            updated_at=T0,
        )
    )
