"""
Session lifecycle service.

Owns the session state machine (active -> completed / cancelled) and the
hydrated read models used by listings and reports.

Layer-pure: depends only on core entities, interfaces and exceptions.
"""

from stockopname.config import get_logger
from stockopname.core.clock import IClock, get_clock
from stockopname.core.entities import (
    Location,
    SessionPatch,
    SessionStatus,
    SessionWithRelations,
    StockOpnameItem,
    StockOpnameSession,
    User,
    is_set,
    provided_fields,
)
from stockopname.core.exceptions import (
    LocationNotFoundError,
    SessionNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from stockopname.core.interfaces import IItemStore, ILocationStore, ISessionStore, IUserStore

logger = get_logger(__name__)


class SessionLifecycleService:
    """
    Opens, updates and lists stock opname sessions.

    Transitions out of a terminal state are not rejected here; callers decide
    whether re-opening is allowed. Such transitions are logged as warnings.

    Concurrent updates of one session are last-writer-wins.
    """

    def __init__(
        self,
        session_store: ISessionStore,
        item_store: IItemStore,
        location_store: ILocationStore,
        user_store: IUserStore,
        clock: IClock | None = None,
        stamp_on_cancel: bool = True,
    ):
        """
        Args:
            session_store: Session persistence
            item_store: Item persistence, used for hydration
            location_store: Location lookup
            user_store: User lookup
            clock: Time source for started_at / completed_at / updated_at
            stamp_on_cancel: Also stamp completed_at when cancelling
        """
        self._sessions = session_store
        self._items = item_store
        self._locations = location_store
        self._users = user_store
        self._clock = clock or get_clock()
        self._stamp_on_cancel = stamp_on_cancel

    async def open_session(
        self,
        location_id: int,
        user_id: int,
        session_name: str,
    ) -> StockOpnameSession:
        """
        Open a new active session.

        Raises:
            ValidationError: If the session name is blank
            LocationNotFoundError: If the location does not exist
            UserNotFoundError: If the user does not exist
        """
        if not isinstance(session_name, str) or not session_name.strip():
            raise ValidationError("session_name", "must be a non-empty string", session_name)

        if await self._locations.get_location(location_id) is None:
            raise LocationNotFoundError(location_id)
        if await self._users.get_user(user_id) is None:
            raise UserNotFoundError(user_id)

        now = self._clock.now()
        session = StockOpnameSession(
            location_id=location_id,
            user_id=user_id,
            session_name=session_name,
            status=SessionStatus.ACTIVE,
            started_at=now,
            completed_at=None,
            signature_data=None,
            created_at=now,
            updated_at=now,
        )
        session = await self._sessions.create_session(session)

        logger.info(
            "session_opened",
            session_id=session.id,
            location_id=location_id,
            user_id=user_id,
        )
        return session

    async def get_session(self, session_id: int) -> StockOpnameSession:
        """Get a session or raise SessionNotFoundError."""
        session = await self._sessions.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def update_session(
        self,
        session_id: int,
        patch: SessionPatch,
    ) -> StockOpnameSession:
        """
        Apply a partial update.

        Only supplied patch fields are written. Entering ``completed`` without
        an explicit ``completed_at`` stamps it with the current time (also for
        ``cancelled`` when ``stamp_on_cancel`` is on). An existing
        ``completed_at`` is never overwritten by the stamp. ``updated_at`` is
        refreshed even for an empty patch.

        Explicit patches may leave status and completed_at out of step:
        ``{completed_at: ts}`` alone keeps an active session active, and
        ``{status: completed, completed_at: None}`` completes it unstamped.

        Raises:
            SessionNotFoundError: If the session does not exist
            ValidationError: If status is explicitly cleared or not a known status
        """
        session = await self.get_session(session_id)
        changes = provided_fields(patch)

        if "status" in changes:
            changes["status"] = self._coerce_status(changes["status"])

        now = self._clock.now()
        previous_status = session.status
        updated = session.model_copy(update=changes)

        if "status" in changes:
            new_status = changes["status"]
            if previous_status.is_terminal and new_status != previous_status:
                logger.warning(
                    "session_reopened_from_terminal_state",
                    session_id=session_id,
                    from_status=previous_status.value,
                    to_status=new_status.value,
                )
            if not is_set(patch.completed_at) and updated.completed_at is None:
                if new_status == SessionStatus.COMPLETED or (
                    new_status == SessionStatus.CANCELLED and self._stamp_on_cancel
                ):
                    updated.completed_at = now

        updated.updated_at = now
        updated = await self._sessions.update_session(updated)

        logger.info(
            "session_updated",
            session_id=session_id,
            fields=sorted(changes),
            status=updated.status.value,
        )
        return updated

    async def get_session_with_relations(self, session_id: int) -> SessionWithRelations:
        """
        Load a session with its location, user and items.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = await self.get_session(session_id)
        location = await self._resolve_location(session.location_id, {})
        user = await self._resolve_user(session.user_id, {})
        items = await self._items.list_items(session_id)
        return self._hydrate(session, location, user, items)

    async def list_sessions_for_user(self, user_id: int) -> list[SessionWithRelations]:
        """
        List all sessions of a user, each fully hydrated.

        Most recently started first. An unknown user has no sessions.
        """
        sessions = await self._sessions.list_sessions_for_user(user_id)
        if not sessions:
            return []

        items_by_session = await self._items.list_items_for_sessions(
            [s.id for s in sessions if s.id is not None]
        )

        # Each location/user is looked up once and shared by identity
        location_cache: dict[int, Location] = {}
        user_cache: dict[int, User] = {}

        result = []
        for session in sessions:
            location = await self._resolve_location(session.location_id, location_cache)
            user = await self._resolve_user(session.user_id, user_cache)
            items = items_by_session.get(session.id, []) if session.id is not None else []
            result.append(self._hydrate(session, location, user, items))

        logger.debug("user_sessions_listed", user_id=user_id, count=len(result))
        return result

    async def _resolve_location(self, location_id: int, cache: dict[int, Location]) -> Location:
        if location_id not in cache:
            location = await self._locations.get_location(location_id)
            if location is None:
                raise LocationNotFoundError(location_id)
            cache[location_id] = location
        return cache[location_id]

    async def _resolve_user(self, user_id: int, cache: dict[int, User]) -> User:
        if user_id not in cache:
            user = await self._users.get_user(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            cache[user_id] = user
        return cache[user_id]

    @staticmethod
    def _coerce_status(value: object) -> SessionStatus:
        if value is None:
            raise ValidationError("status", "cannot be cleared")
        try:
            return SessionStatus(value)
        except ValueError:
            raise ValidationError(
                "status",
                f"must be one of {', '.join(s.value for s in SessionStatus)}",
                value,
            ) from None

    @staticmethod
    def _hydrate(
        session: StockOpnameSession,
        location: Location,
        user: User,
        items: list[StockOpnameItem],
    ) -> SessionWithRelations:
        return SessionWithRelations(
            **session.model_dump(),
            location=location,
            user=user,
            items=items,
        )
