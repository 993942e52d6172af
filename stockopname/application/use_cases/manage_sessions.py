"""
Session use cases: open, update, list per user.
"""

from stockopname.application.dto.requests import OpenSessionRequest, UpdateSessionRequest
from stockopname.application.dto.responses import (
    SessionDetailResponse,
    SessionResponse,
    UserSessionsResponse,
)
from stockopname.core.entities import SessionWithRelations, StockOpnameSession
from stockopname.core.services import SessionLifecycleService


class _SessionUseCase:
    def __init__(self, lifecycle_service: SessionLifecycleService | None = None):
        self._lifecycle_service = lifecycle_service

    async def _get_lifecycle_service(self) -> SessionLifecycleService:
        if self._lifecycle_service is None:
            from stockopname.application.services import get_session_lifecycle_service

            self._lifecycle_service = await get_session_lifecycle_service()
        return self._lifecycle_service


class OpenSessionUseCase(_SessionUseCase):
    """Open a counting session at a location for a user."""

    async def execute(self, request: OpenSessionRequest) -> StockOpnameSession:
        service = await self._get_lifecycle_service()
        return await service.open_session(
            location_id=request.location_id,
            user_id=request.user_id,
            session_name=request.session_name,
        )

    @staticmethod
    def to_response(session: StockOpnameSession) -> SessionResponse:
        return SessionResponse.model_validate(session)


class UpdateSessionUseCase(_SessionUseCase):
    """Apply a partial update (status, signature, completion time)."""

    async def execute(self, session_id: int, request: UpdateSessionRequest) -> StockOpnameSession:
        service = await self._get_lifecycle_service()
        return await service.update_session(session_id, request.to_patch())

    @staticmethod
    def to_response(session: StockOpnameSession) -> SessionResponse:
        return SessionResponse.model_validate(session)


class ListUserSessionsUseCase(_SessionUseCase):
    """All sessions of a user, hydrated, newest first."""

    async def execute(self, user_id: int) -> list[SessionWithRelations]:
        service = await self._get_lifecycle_service()
        return await service.list_sessions_for_user(user_id)

    @staticmethod
    def to_response(user_id: int, sessions: list[SessionWithRelations]) -> UserSessionsResponse:
        return UserSessionsResponse(
            user_id=user_id,
            sessions=[SessionDetailResponse.model_validate(s) for s in sessions],
            total=len(sessions),
        )


class GetSessionUseCase(_SessionUseCase):
    """Single session with location, user and items."""

    async def execute(self, session_id: int) -> SessionWithRelations:
        service = await self._get_lifecycle_service()
        return await service.get_session_with_relations(session_id)

    @staticmethod
    def to_response(session: SessionWithRelations) -> SessionDetailResponse:
        return SessionDetailResponse.model_validate(session)
