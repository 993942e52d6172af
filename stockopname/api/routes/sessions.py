"""Stock opname session endpoints."""

from fastapi import APIRouter, Depends, status

from stockopname.api.dependencies import (
    get_open_session_use_case,
    get_session_detail_use_case,
    get_update_session_use_case,
)
from stockopname.application.dto.requests import OpenSessionRequest, UpdateSessionRequest
from stockopname.application.dto.responses import (
    ErrorResponse,
    SessionDetailResponse,
    SessionResponse,
)
from stockopname.application.use_cases import (
    GetSessionUseCase,
    OpenSessionUseCase,
    UpdateSessionUseCase,
)

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def open_session(
    request: OpenSessionRequest,
    use_case: OpenSessionUseCase = Depends(get_open_session_use_case),
) -> SessionResponse:
    """Open a new active session at a location."""
    session = await use_case.execute(request)
    return use_case.to_response(session)


@router.get(
    "/{session_id}",
    response_model=SessionDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_session(
    session_id: int,
    use_case: GetSessionUseCase = Depends(get_session_detail_use_case),
) -> SessionDetailResponse:
    session = await use_case.execute(session_id)
    return use_case.to_response(session)


@router.patch(
    "/{session_id}",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_session(
    session_id: int,
    request: UpdateSessionRequest,
    use_case: UpdateSessionUseCase = Depends(get_update_session_use_case),
) -> SessionResponse:
    """
    Partially update a session.

    Omitted fields are untouched and ``null`` clears a field. Completing a
    session without ``completed_at`` stamps the current time.
    """
    session = await use_case.execute(session_id, request)
    return use_case.to_response(session)
