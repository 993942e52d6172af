"""
Abstract persistence interfaces.

The core only talks to storage through these ports. Implementations enforce
uniqueness (location code, username, email) and foreign-key existence and
raise ConstraintViolationError when either is broken.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from stockopname.core.entities import (
    Location,
    StockOpnameItem,
    StockOpnameSession,
    User,
    UserCredentials,
)


class ILocationStore(ABC):
    """Interface for location persistence."""

    @abstractmethod
    async def create_location(self, location: Location) -> Location:
        """Insert a location and return it with its id."""
        pass

    @abstractmethod
    async def get_location(self, location_id: int) -> Location | None:
        """Get location by ID."""
        pass

    @abstractmethod
    async def get_location_by_code(self, code: str) -> Location | None:
        """Get location by its unique code."""
        pass

    @abstractmethod
    async def list_locations(self) -> list[Location]:
        """List all locations ordered by name."""
        pass

    @abstractmethod
    async def update_location(self, location: Location) -> Location:
        """Persist name/description/updated_at of an existing location."""
        pass


class IUserStore(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def create_user(self, user: User, password_hash: str) -> User:
        """Insert a user with its password hash."""
        pass

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        """Get user by ID (no credential material)."""
        pass

    @abstractmethod
    async def get_credentials(self, username: str) -> UserCredentials | None:
        """Get a user and its password hash by username."""
        pass


class ISessionStore(ABC):
    """Interface for stock opname session persistence."""

    @abstractmethod
    async def create_session(self, session: StockOpnameSession) -> StockOpnameSession:
        """Insert a session and return it with its id."""
        pass

    @abstractmethod
    async def get_session(self, session_id: int) -> StockOpnameSession | None:
        """Get session by ID."""
        pass

    @abstractmethod
    async def update_session(self, session: StockOpnameSession) -> StockOpnameSession:
        """Persist status, completed_at, signature_data and updated_at."""
        pass

    @abstractmethod
    async def list_sessions_for_user(self, user_id: int) -> list[StockOpnameSession]:
        """List a user's sessions, most recently started first."""
        pass


class IItemStore(ABC):
    """Interface for stock opname item persistence. Append-only."""

    @abstractmethod
    async def add_item(self, item: StockOpnameItem) -> StockOpnameItem:
        """Insert an item and return it with its id."""
        pass

    @abstractmethod
    def iter_items(self, session_id: int) -> AsyncIterator[StockOpnameItem]:
        """Stream a session's items ordered by scanned_at, then id."""
        pass

    @abstractmethod
    async def list_items(self, session_id: int) -> list[StockOpnameItem]:
        """Get a session's items ordered by scanned_at, then id."""
        pass

    @abstractmethod
    async def list_items_for_sessions(
        self, session_ids: Sequence[int]
    ) -> dict[int, list[StockOpnameItem]]:
        """Get items for several sessions at once, grouped by session id."""
        pass
