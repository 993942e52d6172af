"""SQLite storage implementations."""

from stockopname.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from stockopname.infrastructure.storage.sqlite.item_store import SQLiteItemStore
from stockopname.infrastructure.storage.sqlite.location_store import SQLiteLocationStore
from stockopname.infrastructure.storage.sqlite.session_store import SQLiteSessionStore
from stockopname.infrastructure.storage.sqlite.user_store import SQLiteUserStore

# Singleton instances
_location_store: SQLiteLocationStore | None = None
_user_store: SQLiteUserStore | None = None
_session_store: SQLiteSessionStore | None = None
_item_store: SQLiteItemStore | None = None


async def get_location_store() -> SQLiteLocationStore:
    """Get singleton location store instance."""
    global _location_store
    if _location_store is None:
        _location_store = SQLiteLocationStore()
    return _location_store


async def get_user_store() -> SQLiteUserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


async def get_session_store() -> SQLiteSessionStore:
    """Get singleton session store instance."""
    global _session_store
    if _session_store is None:
        _session_store = SQLiteSessionStore()
    return _session_store


async def get_item_store() -> SQLiteItemStore:
    """Get singleton item store instance."""
    global _item_store
    if _item_store is None:
        _item_store = SQLiteItemStore()
    return _item_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteLocationStore",
    "SQLiteUserStore",
    "SQLiteSessionStore",
    "SQLiteItemStore",
    # Factory functions
    "get_location_store",
    "get_user_store",
    "get_session_store",
    "get_item_store",
]
