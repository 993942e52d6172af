"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from stockopname.core.clock import FixedClock
from stockopname.core.entities import (
    Location,
    SessionStatus,
    SessionWithRelations,
    StockOpnameItem,
    StockOpnameSession,
    User,
)

T0 = datetime(2024, 1, 15, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at 2024-01-15 09:30:00 UTC."""
    return FixedClock(T0)


@pytest.fixture
def sample_location() -> Location:
    return Location(
        id=1,
        name="Warehouse A",
        code="WH-A",
        description="Main warehouse",
        created_at=T0,
        updated_at=T0,
    )


@pytest.fixture
def sample_user() -> User:
    return User(
        id=1,
        username="alice",
        email="alice@example.com",
        full_name="Alice Example",
        created_at=T0,
        updated_at=T0,
    )


@pytest.fixture
def sample_session() -> StockOpnameSession:
    return StockOpnameSession(
        id=10,
        location_id=1,
        user_id=1,
        session_name="January count",
        status=SessionStatus.ACTIVE,
        started_at=T0,
        created_at=T0,
        updated_at=T0,
    )


@pytest.fixture
def sample_items() -> list[StockOpnameItem]:
    return [
        StockOpnameItem(
            id=100,
            session_id=10,
            sku="SKU001",
            lot_number="LOT001",
            quantity=10,
            barcode_data="8991234567890",
            scanned_at=T0 + timedelta(minutes=1),
            created_at=T0 + timedelta(minutes=1),
        ),
        StockOpnameItem(
            id=101,
            session_id=10,
            sku="SKU002",
            lot_number="LOT002",
            quantity=25,
            barcode_data="8991234567891",
            scanned_at=T0 + timedelta(minutes=2),
            created_at=T0 + timedelta(minutes=2),
        ),
    ]


@pytest.fixture
def hydrated_session(sample_session, sample_location, sample_user, sample_items) -> SessionWithRelations:
    """Session 10 at WH-A by alice with two items."""
    return SessionWithRelations(
        **sample_session.model_dump(),
        location=sample_location,
        user=sample_user,
        items=sample_items,
    )
