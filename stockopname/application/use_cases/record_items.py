"""
Item use cases: append to a session and list a session's items.
"""

from stockopname.application.dto.requests import AppendItemRequest
from stockopname.application.dto.responses import ItemListResponse, ItemResponse
from stockopname.config import get_logger
from stockopname.core.entities import StockOpnameItem
from stockopname.core.services import ItemLedgerService

logger = get_logger(__name__)


class _ItemUseCase:
    def __init__(self, ledger_service: ItemLedgerService | None = None):
        self._ledger_service = ledger_service

    async def _get_ledger_service(self) -> ItemLedgerService:
        if self._ledger_service is None:
            from stockopname.application.services import get_item_ledger_service

            self._ledger_service = await get_item_ledger_service()
        return self._ledger_service


class AppendItemUseCase(_ItemUseCase):
    """Record a scanned or manually entered item."""

    async def execute(self, session_id: int, request: AppendItemRequest) -> StockOpnameItem:
        service = await self._get_ledger_service()
        return await service.append_item(
            session_id=session_id,
            sku=request.sku,
            lot_number=request.lot_number,
            quantity=request.quantity,
            barcode_data=request.barcode_data,
        )

    @staticmethod
    def to_response(item: StockOpnameItem) -> ItemResponse:
        return ItemResponse.model_validate(item)


class ListSessionItemsUseCase(_ItemUseCase):
    """Snapshot of a session's items, oldest scan first."""

    async def execute(self, session_id: int) -> list[StockOpnameItem]:
        service = await self._get_ledger_service()
        sequence = await service.list_items(session_id)
        items = await sequence.to_list()
        logger.debug("session_items_listed", session_id=session_id, count=len(items))
        return items

    @staticmethod
    def to_response(session_id: int, items: list[StockOpnameItem]) -> ItemListResponse:
        return ItemListResponse(
            session_id=session_id,
            items=[ItemResponse.model_validate(item) for item in items],
            total=len(items),
        )
