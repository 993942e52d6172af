"""Tests for LocationCatalogService."""

from unittest.mock import AsyncMock

import pytest

from stockopname.core.entities import LocationPatch
from stockopname.core.exceptions import (
    ConstraintViolationError,
    LocationNotFoundError,
    ValidationError,
)
from stockopname.core.services import LocationCatalogService


@pytest.fixture
def location_store(sample_location):
    store = AsyncMock()
    store.get_location.return_value = sample_location

    async def echo(location):
        if location.id is None:
            location.id = 2
        return location

    store.create_location.side_effect = echo
    store.update_location.side_effect = echo
    return store


@pytest.fixture
def catalog(location_store, clock):
    return LocationCatalogService(location_store, clock)


class TestCreateLocation:
    async def test_creates(self, catalog, clock):
        location = await catalog.create_location("Warehouse B", "WH-B", None)
        assert location.id == 2
        assert location.code == "WH-B"
        assert location.description is None
        assert location.created_at == clock.now()

    @pytest.mark.parametrize("name,code", [("", "WH-B"), ("Warehouse B", "  ")])
    async def test_blank_fields(self, catalog, location_store, name, code):
        with pytest.raises(ValidationError):
            await catalog.create_location(name, code)
        location_store.create_location.assert_not_awaited()

    async def test_duplicate_code_propagates(self, catalog, location_store):
        location_store.create_location.side_effect = ConstraintViolationError(
            "create_location", "UNIQUE constraint failed: locations.code"
        )
        with pytest.raises(ConstraintViolationError):
            await catalog.create_location("Warehouse A", "WH-A")


class TestGetAndList:
    async def test_get_missing(self, catalog, location_store):
        location_store.get_location.return_value = None
        with pytest.raises(LocationNotFoundError):
            await catalog.get_location(5)

    async def test_list(self, catalog, location_store, sample_location):
        location_store.list_locations.return_value = [sample_location]
        assert await catalog.list_locations() == [sample_location]


class TestUpdateLocation:
    async def test_partial_update(self, catalog, clock, sample_location):
        clock.advance(hours=1)
        updated = await catalog.update_location(1, LocationPatch(description=None))

        assert updated.description is None
        assert updated.name == sample_location.name
        assert updated.code == "WH-A"
        assert updated.updated_at == clock.now()

    async def test_rename(self, catalog):
        updated = await catalog.update_location(1, LocationPatch(name="Warehouse North"))
        assert updated.name == "Warehouse North"

    async def test_blank_name_rejected(self, catalog, location_store):
        with pytest.raises(ValidationError):
            await catalog.update_location(1, LocationPatch(name=" "))
        location_store.update_location.assert_not_awaited()

    async def test_missing_location(self, catalog, location_store):
        location_store.get_location.return_value = None
        with pytest.raises(LocationNotFoundError):
            await catalog.update_location(9, LocationPatch(name="X"))
