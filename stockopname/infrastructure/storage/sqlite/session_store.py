"""SQLite implementation of stock opname session storage."""

import aiosqlite

from stockopname.config import get_logger
from stockopname.core.entities import SessionStatus, StockOpnameSession
from stockopname.core.exceptions import SessionNotFoundError
from stockopname.core.interfaces import ISessionStore
from stockopname.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from stockopname.infrastructure.storage.sqlite.timestamps import from_db, to_db

logger = get_logger(__name__)


class SQLiteSessionStore(ISessionStore):
    """SQLite implementation of session storage."""

    async def create_session(self, session: StockOpnameSession) -> StockOpnameSession:
        async with get_transaction("create_session") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_opname_sessions (
                    location_id, user_id, session_name, status,
                    started_at, completed_at, signature_data,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.location_id,
                    session.user_id,
                    session.session_name,
                    session.status.value,
                    to_db(session.started_at),
                    to_db(session.completed_at),
                    session.signature_data,
                    to_db(session.created_at),
                    to_db(session.updated_at),
                ),
            )
            session.id = cursor.lastrowid
            logger.debug("session_inserted", session_id=session.id)
            return session

    async def get_session(self, session_id: int) -> StockOpnameSession | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_opname_sessions WHERE id = ?",
                (session_id,),
            )
            row = await cursor.fetchone()
            return self._row_to_session(row) if row else None

    async def update_session(self, session: StockOpnameSession) -> StockOpnameSession:
        async with get_transaction("update_session") as conn:
            cursor = await conn.execute(
                """
                UPDATE stock_opname_sessions SET
                    status = ?, completed_at = ?, signature_data = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    session.status.value,
                    to_db(session.completed_at),
                    session.signature_data,
                    to_db(session.updated_at),
                    session.id,
                ),
            )
            if cursor.rowcount == 0:
                raise SessionNotFoundError(session.id)
            return session

    async def list_sessions_for_user(self, user_id: int) -> list[StockOpnameSession]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM stock_opname_sessions
                WHERE user_id = ?
                ORDER BY started_at DESC, id DESC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    @staticmethod
    def _row_to_session(row: aiosqlite.Row) -> StockOpnameSession:
        return StockOpnameSession(
            id=row["id"],
            location_id=row["location_id"],
            user_id=row["user_id"],
            session_name=row["session_name"],
            status=SessionStatus(row["status"]),
            started_at=from_db(row["started_at"]),
            completed_at=from_db(row["completed_at"]),
            signature_data=row["signature_data"],
            created_at=from_db(row["created_at"]),
            updated_at=from_db(row["updated_at"]),
        )
