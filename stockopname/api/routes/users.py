"""User endpoints."""

from fastapi import APIRouter, Depends, status

from stockopname.api.dependencies import (
    get_create_user_use_case,
    get_list_user_sessions_use_case,
)
from stockopname.application.dto.requests import CreateUserRequest
from stockopname.application.dto.responses import (
    ErrorResponse,
    UserResponse,
    UserSessionsResponse,
)
from stockopname.application.use_cases import CreateUserUseCase, ListUserSessionsUseCase

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_user(
    request: CreateUserRequest,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> UserResponse:
    """Register a user."""
    user = await use_case.execute(request)
    return use_case.to_response(user)


@router.get("/{user_id}/sessions", response_model=UserSessionsResponse)
async def list_user_sessions(
    user_id: int,
    use_case: ListUserSessionsUseCase = Depends(get_list_user_sessions_use_case),
) -> UserSessionsResponse:
    """All sessions of a user with location, user and items, newest first."""
    sessions = await use_case.execute(user_id)
    return use_case.to_response(user_id, sessions)
