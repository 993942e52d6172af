"""
SQLite implementation of stock opname item storage.

Items are append-only: there is no update or delete path.
"""

from collections import defaultdict
from collections.abc import AsyncIterator, Sequence

import aiosqlite

from stockopname.config import get_logger
from stockopname.core.entities import StockOpnameItem
from stockopname.core.interfaces import IItemStore
from stockopname.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from stockopname.infrastructure.storage.sqlite.timestamps import from_db, to_db

logger = get_logger(__name__)


class SQLiteItemStore(IItemStore):
    """SQLite implementation of item storage."""

    async def add_item(self, item: StockOpnameItem) -> StockOpnameItem:
        async with get_transaction("add_item") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_opname_items (
                    session_id, sku, lot_number, quantity, barcode_data,
                    scanned_at, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.session_id,
                    item.sku,
                    item.lot_number,
                    item.quantity,
                    item.barcode_data,
                    to_db(item.scanned_at),
                    to_db(item.created_at),
                ),
            )
            item.id = cursor.lastrowid
            logger.debug("item_inserted", item_id=item.id, session_id=item.session_id, sku=item.sku)
            return item

    async def iter_items(self, session_id: int) -> AsyncIterator[StockOpnameItem]:
        async with get_connection() as conn:
            async with conn.execute(
                """
                SELECT * FROM stock_opname_items
                WHERE session_id = ?
                ORDER BY scanned_at, id
                """,
                (session_id,),
            ) as cursor:
                async for row in cursor:
                    yield self._row_to_item(row)

    async def list_items(self, session_id: int) -> list[StockOpnameItem]:
        return [item async for item in self.iter_items(session_id)]

    async def list_items_for_sessions(
        self, session_ids: Sequence[int]
    ) -> dict[int, list[StockOpnameItem]]:
        if not session_ids:
            return {}

        placeholders = ",".join("?" * len(session_ids))
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM stock_opname_items
                WHERE session_id IN ({placeholders})
                ORDER BY scanned_at, id
                """,
                tuple(session_ids),
            )
            rows = await cursor.fetchall()

        grouped: dict[int, list[StockOpnameItem]] = defaultdict(list)
        for row in rows:
            item = self._row_to_item(row)
            grouped[item.session_id].append(item)
        return dict(grouped)

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> StockOpnameItem:
        return StockOpnameItem(
            id=row["id"],
            session_id=row["session_id"],
            sku=row["sku"],
            lot_number=row["lot_number"],
            quantity=row["quantity"],
            barcode_data=row["barcode_data"],
            scanned_at=from_db(row["scanned_at"]),
            created_at=from_db(row["created_at"]),
        )
