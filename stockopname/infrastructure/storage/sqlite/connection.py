"""
Pooled aiosqlite connections for the opname stores.

Every store write goes through ``get_transaction(operation)``; the operation
name travels with any storage error so the API can report which write
failed.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from stockopname.config import get_logger, get_settings
from stockopname.config.settings import StorageSettings
from stockopname.core.exceptions import ConstraintViolationError, DatabaseError, StorageError

logger = get_logger(__name__)

# Applied to each connection as it is opened; busy_timeout is per pool
CONNECTION_PRAGMAS = (
    "journal_mode=WAL",
    "synchronous=NORMAL",
    "foreign_keys=ON",
)


def translate_driver_error(operation: str, exc: aiosqlite.Error) -> StorageError:
    """Map an aiosqlite failure onto the storage exception hierarchy."""
    if isinstance(exc, aiosqlite.IntegrityError):
        # UNIQUE on users.username, users.email and locations.code; FK on session/item parents
        return ConstraintViolationError(operation, str(exc))
    return DatabaseError(operation, str(exc))


class ConnectionPool:
    """
    Fixed-size set of SQLite connections shared through an asyncio queue.

    Connections are opened on first use, so a pool can be built at import
    time and only touches the disk when a store needs it.
    """

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._pool: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(maxsize=pool_size)
        self._connections: list[aiosqlite.Connection] = []
        self._open = False
        self._guard = asyncio.Lock()

    @classmethod
    def from_settings(cls, storage: StorageSettings) -> "ConnectionPool":
        return cls(storage.db_path, pool_size=storage.pool_size, busy_timeout=storage.busy_timeout)

    @property
    def initialized(self) -> bool:
        return self._open

    async def _connect(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        for pragma in (*CONNECTION_PRAGMAS, f"busy_timeout={self.busy_timeout}"):
            await conn.execute(f"PRAGMA {pragma}")
        conn.row_factory = aiosqlite.Row
        return conn

    async def initialize(self) -> None:
        async with self._guard:
            if self._open:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            while len(self._connections) < self.pool_size:
                conn = await self._connect()
                self._connections.append(conn)
                self._pool.put_nowait(conn)
            self._open = True
        logger.info("connection_pool_opened", db_path=str(self.db_path), size=self.pool_size)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection; it goes back to the queue whatever happens."""
        if not self._open:
            await self.initialize()
        conn = await self._pool.get()
        try:
            yield conn
        finally:
            self._pool.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self, operation: str = "transaction") -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection and commit when the block exits cleanly.

        Anything raised inside the block rolls the work back. Driver errors
        are re-raised as ConstraintViolationError or DatabaseError carrying
        ``operation``; other exceptions propagate untouched.
        """
        async with self.acquire() as conn:
            try:
                yield conn
                await conn.commit()
            except BaseException as exc:
                await conn.rollback()
                if not isinstance(exc, aiosqlite.Error):
                    raise
                error = translate_driver_error(operation, exc)
                log = logger.warning if isinstance(error, ConstraintViolationError) else logger.error
                log("transaction_failed", operation=operation, error_code=error.code, error=str(exc))
                raise error from exc

    async def ping(self) -> bool:
        async with self.acquire() as conn:
            cursor = await conn.execute("SELECT 1")
            row = await cursor.fetchone()
        return row is not None and row[0] == 1

    async def close(self) -> None:
        async with self._guard:
            while self._connections:
                await self._connections.pop().close()
            self._pool = asyncio.Queue(maxsize=self.pool_size)
            self._open = False
        logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Process-wide pool over the configured database file."""
    global _pool
    if _pool is None:
        _pool = ConnectionPool.from_settings(get_settings().storage)
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    pool, _pool = _pool, None
    if pool is not None:
        await pool.close()


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    """Read-only access; nothing is committed."""
    async with (await get_pool()).acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction(operation: str = "transaction") -> AsyncIterator[aiosqlite.Connection]:
    async with (await get_pool()).transaction(operation) as conn:
        yield conn
