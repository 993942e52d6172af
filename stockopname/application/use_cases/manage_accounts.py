"""
Account use cases: registration and login.
"""

from stockopname.application.dto.requests import CreateUserRequest, LoginRequest
from stockopname.application.dto.responses import UserResponse
from stockopname.core.entities import User
from stockopname.core.services import AccountService


class _AccountUseCase:
    def __init__(self, account_service: AccountService | None = None):
        self._account_service = account_service

    async def _get_account_service(self) -> AccountService:
        if self._account_service is None:
            from stockopname.application.services import get_account_service

            self._account_service = await get_account_service()
        return self._account_service

    @staticmethod
    def to_response(user: User) -> UserResponse:
        return UserResponse.model_validate(user)


class CreateUserUseCase(_AccountUseCase):
    """Register a user; the password is hashed before storage."""

    async def execute(self, request: CreateUserRequest) -> User:
        service = await self._get_account_service()
        return await service.create_user(
            username=request.username,
            email=request.email,
            full_name=request.full_name,
            password=request.password,
        )


class LoginUseCase(_AccountUseCase):
    """Check credentials and return the user."""

    async def execute(self, request: LoginRequest) -> User:
        service = await self._get_account_service()
        return await service.login(request.username, request.password)
