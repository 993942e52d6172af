"""
Item ledger service.

Append-only record of counted items per session. Items are only accepted
while their session is active.
"""

from collections.abc import AsyncIterator

from stockopname.config import get_logger
from stockopname.core.clock import IClock, get_clock
from stockopname.core.entities import StockOpnameItem
from stockopname.core.exceptions import (
    SessionNotActiveError,
    SessionNotFoundError,
    ValidationError,
)
from stockopname.core.interfaces import IItemStore, ISessionStore

logger = get_logger(__name__)


class ItemSequence:
    """
    Lazy, re-iterable view over a session's items.

    Each ``async for`` runs a fresh query, so items appended between two
    iterations show up in the second one.
    """

    def __init__(self, item_store: IItemStore, session_id: int):
        self._store = item_store
        self.session_id = session_id

    def __aiter__(self) -> AsyncIterator[StockOpnameItem]:
        return self._store.iter_items(self.session_id)

    async def to_list(self) -> list[StockOpnameItem]:
        return [item async for item in self]


class ItemLedgerService:
    """Appends and lists stock opname items."""

    def __init__(
        self,
        item_store: IItemStore,
        session_store: ISessionStore,
        clock: IClock | None = None,
    ):
        self._items = item_store
        self._sessions = session_store
        self._clock = clock or get_clock()

    async def append_item(
        self,
        session_id: int,
        sku: str,
        lot_number: str,
        quantity: int,
        barcode_data: str,
    ) -> StockOpnameItem:
        """
        Record one counted item in an active session.

        ``scanned_at`` is stamped from the clock. Validation runs before
        anything is written.

        Raises:
            ValidationError: If a field is malformed or quantity is negative
            SessionNotFoundError: If the session does not exist
            SessionNotActiveError: If the session is completed or cancelled
        """
        self._validate_item(sku, lot_number, quantity, barcode_data)

        session = await self._sessions.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if not session.is_active:
            logger.warning(
                "item_rejected_inactive_session",
                session_id=session_id,
                status=session.status.value,
            )
            raise SessionNotActiveError(session_id, session.status.value)

        now = self._clock.now()
        item = StockOpnameItem(
            session_id=session_id,
            sku=sku,
            lot_number=lot_number,
            quantity=quantity,
            barcode_data=barcode_data,
            scanned_at=now,
            created_at=now,
        )
        item = await self._items.add_item(item)

        logger.info(
            "item_appended",
            session_id=session_id,
            item_id=item.id,
            sku=sku,
            quantity=quantity,
        )
        return item

    async def list_items(self, session_id: int) -> ItemSequence:
        """
        Get a lazy sequence over a session's items, oldest scan first.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        if await self._sessions.get_session(session_id) is None:
            raise SessionNotFoundError(session_id)
        return ItemSequence(self._items, session_id)

    @staticmethod
    def _validate_item(sku: object, lot_number: object, quantity: object, barcode_data: object) -> None:
        if not isinstance(sku, str) or not sku.strip():
            raise ValidationError("sku", "must be a non-empty string", sku)
        if not isinstance(lot_number, str):
            raise ValidationError("lot_number", "must be a string", lot_number)
        if not isinstance(barcode_data, str):
            raise ValidationError("barcode_data", "must be a string", barcode_data)
        # bool is an int subclass
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError("quantity", "must be an integer", quantity)
        if quantity < 0:
            raise ValidationError("quantity", "must be zero or greater", quantity)
