"""Tests for ItemLedgerService."""

from unittest.mock import AsyncMock

import pytest

from stockopname.core.entities import SessionStatus
from stockopname.core.exceptions import (
    SessionNotActiveError,
    SessionNotFoundError,
    ValidationError,
)
from stockopname.core.services import ItemLedgerService, ItemSequence


@pytest.fixture
def item_store():
    store = AsyncMock()

    async def assign_id(item):
        item.id = 500
        return item

    store.add_item.side_effect = assign_id
    return store


@pytest.fixture
def session_store(sample_session):
    store = AsyncMock()
    store.get_session.return_value = sample_session
    return store


@pytest.fixture
def ledger(item_store, session_store, clock):
    return ItemLedgerService(item_store=item_store, session_store=session_store, clock=clock)


class TestAppendItem:
    async def test_appends_to_active_session(self, ledger, item_store, clock):
        item = await ledger.append_item(10, "SKU001", "LOT001", 10, "8991234567890")

        assert item.id == 500
        assert item.session_id == 10
        assert item.quantity == 10
        assert item.scanned_at == clock.now()
        item_store.add_item.assert_awaited_once()

    async def test_zero_quantity_accepted(self, ledger):
        item = await ledger.append_item(10, "SKU001", "LOT001", 0, "")
        assert item.quantity == 0

    async def test_empty_lot_and_barcode_accepted(self, ledger):
        item = await ledger.append_item(10, "SKU001", "", 1, "")
        assert item.lot_number == ""
        assert item.barcode_data == ""

    async def test_unknown_session(self, ledger, session_store, item_store):
        session_store.get_session.return_value = None
        with pytest.raises(SessionNotFoundError):
            await ledger.append_item(99, "SKU001", "LOT001", 1, "")
        item_store.add_item.assert_not_awaited()

    @pytest.mark.parametrize("status", [SessionStatus.COMPLETED, SessionStatus.CANCELLED])
    async def test_inactive_session_rejected(self, ledger, session_store, item_store, sample_session, status):
        session_store.get_session.return_value = sample_session.model_copy(update={"status": status})

        with pytest.raises(SessionNotActiveError) as exc_info:
            await ledger.append_item(10, "SKU001", "LOT001", 1, "")

        assert exc_info.value.details["status"] == status.value
        item_store.add_item.assert_not_awaited()

    @pytest.mark.parametrize(
        "sku,lot,quantity,barcode,field",
        [
            ("", "LOT", 1, "", "sku"),
            ("   ", "LOT", 1, "", "sku"),
            (None, "LOT", 1, "", "sku"),
            ("SKU", None, 1, "", "lot_number"),
            ("SKU", "LOT", 1, None, "barcode_data"),
            ("SKU", "LOT", -1, "", "quantity"),
            ("SKU", "LOT", 1.5, "", "quantity"),
            ("SKU", "LOT", "3", "", "quantity"),
            ("SKU", "LOT", True, "", "quantity"),
        ],
    )
    async def test_invalid_fields(self, ledger, session_store, item_store, sku, lot, quantity, barcode, field):
        with pytest.raises(ValidationError) as exc_info:
            await ledger.append_item(10, sku, lot, quantity, barcode)

        assert exc_info.value.details["field"] == field
        session_store.get_session.assert_not_awaited()
        item_store.add_item.assert_not_awaited()


class TestListItems:
    async def test_unknown_session_fails_eagerly(self, ledger, session_store):
        session_store.get_session.return_value = None
        with pytest.raises(SessionNotFoundError):
            await ledger.list_items(99)

    async def test_returns_lazy_sequence(self, ledger, item_store, sample_items):
        calls = []

        async def iter_items(session_id):
            calls.append(session_id)
            for item in sample_items:
                yield item

        item_store.iter_items = iter_items

        sequence = await ledger.list_items(10)

        assert isinstance(sequence, ItemSequence)
        assert calls == []
        assert [i.sku async for i in sequence] == ["SKU001", "SKU002"]
        assert await sequence.to_list() == sample_items
        # Each iteration is a fresh query
        assert calls == [10, 10]

    async def test_sequence_sees_later_appends(self, ledger, item_store, sample_items):
        stored = list(sample_items[:1])

        async def iter_items(session_id):
            for item in list(stored):
                yield item

        item_store.iter_items = iter_items

        sequence = await ledger.list_items(10)
        assert len(await sequence.to_list()) == 1

        stored.append(sample_items[1])
        assert len(await sequence.to_list()) == 2
