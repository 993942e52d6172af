"""Stock opname item endpoints."""

from fastapi import APIRouter, Depends, status

from stockopname.api.dependencies import (
    get_append_item_use_case,
    get_list_session_items_use_case,
)
from stockopname.application.dto.requests import AppendItemRequest
from stockopname.application.dto.responses import ErrorResponse, ItemListResponse, ItemResponse
from stockopname.application.use_cases import AppendItemUseCase, ListSessionItemsUseCase

router = APIRouter(prefix="/api/sessions/{session_id}/items", tags=["items"])


@router.get(
    "",
    response_model=ItemListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_session_items(
    session_id: int,
    use_case: ListSessionItemsUseCase = Depends(get_list_session_items_use_case),
) -> ItemListResponse:
    """Items of a session, oldest scan first."""
    items = await use_case.execute(session_id)
    return use_case.to_response(session_id, items)


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def append_item(
    session_id: int,
    request: AppendItemRequest,
    use_case: AppendItemUseCase = Depends(get_append_item_use_case),
) -> ItemResponse:
    """Record a counted item. Only active sessions accept items."""
    item = await use_case.execute(session_id, request)
    return use_case.to_response(item)
