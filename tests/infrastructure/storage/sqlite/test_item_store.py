"""Unit tests for SQLiteItemStore."""

from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from stockopname.core.entities import StockOpnameItem
from stockopname.core.exceptions import ConstraintViolationError


def _item(session_id: int, sku: str, scanned_at, quantity: int = 1) -> StockOpnameItem:
    return StockOpnameItem(
        session_id=session_id,
        sku=sku,
        lot_number=f"LOT-{sku}",
        quantity=quantity,
        barcode_data="",
        scanned_at=scanned_at,
        created_at=scanned_at,
    )


class TestAddItem:
    async def test_assigns_id(self, item_store, stored_session):
        item = await item_store.add_item(_item(stored_session.id, "SKU001", stored_session.started_at, 10))

        assert item.id is not None
        items = await item_store.list_items(stored_session.id)
        assert items == [item]

    async def test_logs_insert(self, item_store, stored_session):
        with capture_logs() as logs:
            item = await item_store.add_item(_item(stored_session.id, "SKU009", stored_session.started_at))

        inserted = [e for e in logs if e["event"] == "item_inserted"]
        assert inserted == [
            {
                "event": "item_inserted",
                "log_level": "debug",
                "item_id": item.id,
                "session_id": stored_session.id,
                "sku": "SKU009",
            }
        ]

    async def test_unknown_session_rejected(self, item_store, stored_session):
        with pytest.raises(ConstraintViolationError):
            await item_store.add_item(_item(404, "SKU001", stored_session.started_at))


class TestIterItems:
    async def test_ordered_by_scan_time(self, item_store, stored_session):
        t0 = stored_session.started_at
        await item_store.add_item(_item(stored_session.id, "LATE", t0 + timedelta(minutes=5)))
        await item_store.add_item(_item(stored_session.id, "EARLY", t0 + timedelta(minutes=1)))
        await item_store.add_item(_item(stored_session.id, "TIE", t0 + timedelta(minutes=5)))

        skus = [item.sku async for item in item_store.iter_items(stored_session.id)]

        assert skus == ["EARLY", "LATE", "TIE"]

    async def test_empty_session(self, item_store, stored_session):
        assert [item async for item in item_store.iter_items(stored_session.id)] == []

    async def test_only_requested_session(self, item_store, session_store, stored_session):
        other = await session_store.create_session(
            stored_session.model_copy(update={"id": None, "session_name": "Other"})
        )
        t0 = stored_session.started_at
        await item_store.add_item(_item(stored_session.id, "MINE-1", t0))
        await item_store.add_item(_item(other.id, "THEIRS", t0 + timedelta(seconds=1)))
        await item_store.add_item(_item(stored_session.id, "MINE-2", t0 + timedelta(seconds=2)))

        mine = [item async for item in item_store.iter_items(stored_session.id)]
        theirs = [item async for item in item_store.iter_items(other.id)]

        assert [i.sku for i in mine] == ["MINE-1", "MINE-2"]
        assert {i.session_id for i in mine} == {stored_session.id}
        assert [i.sku for i in theirs] == ["THEIRS"]


class TestListItemsForSessions:
    async def test_groups_by_session(self, item_store, session_store, stored_session):
        other = await session_store.create_session(
            stored_session.model_copy(update={"id": None, "session_name": "Other"})
        )
        t0 = stored_session.started_at
        await item_store.add_item(_item(stored_session.id, "A", t0))
        await item_store.add_item(_item(other.id, "B", t0))
        await item_store.add_item(_item(stored_session.id, "C", t0 + timedelta(seconds=1)))

        grouped = await item_store.list_items_for_sessions([stored_session.id, other.id])

        assert [i.sku for i in grouped[stored_session.id]] == ["A", "C"]
        assert [i.sku for i in grouped[other.id]] == ["B"]

    async def test_empty_input(self, item_store):
        assert await item_store.list_items_for_sessions([]) == {}

    async def test_sessions_without_items_absent(self, item_store, stored_session):
        assert await item_store.list_items_for_sessions([stored_session.id]) == {}
