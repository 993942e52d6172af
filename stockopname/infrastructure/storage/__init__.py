"""Storage infrastructure implementations."""

from stockopname.infrastructure.storage.sqlite import (
    SQLiteItemStore,
    SQLiteLocationStore,
    SQLiteSessionStore,
    SQLiteUserStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteLocationStore",
    "SQLiteUserStore",
    "SQLiteSessionStore",
    "SQLiteItemStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
