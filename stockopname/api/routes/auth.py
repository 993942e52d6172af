"""Authentication endpoints."""

from fastapi import APIRouter, Depends

from stockopname.api.dependencies import get_login_use_case
from stockopname.application.dto.requests import LoginRequest
from stockopname.application.dto.responses import ErrorResponse, UserResponse
from stockopname.application.use_cases import LoginUseCase

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
) -> UserResponse:
    """Verify credentials and return the user (never the password hash)."""
    user = await use_case.execute(request)
    return use_case.to_response(user)
