"""
SQLite implementation of user storage.

The password hash column is only read by get_credentials.
"""

import aiosqlite

from stockopname.config import get_logger
from stockopname.core.entities import User, UserCredentials
from stockopname.core.interfaces import IUserStore
from stockopname.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from stockopname.infrastructure.storage.sqlite.timestamps import from_db, to_db

logger = get_logger(__name__)

USER_COLUMNS = "id, username, email, full_name, created_at, updated_at"


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user storage."""

    async def create_user(self, user: User, password_hash: str) -> User:
        async with get_transaction("create_user") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO users (
                    username, email, full_name, password_hash, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    user.username,
                    user.email,
                    user.full_name,
                    password_hash,
                    to_db(user.created_at),
                    to_db(user.updated_at),
                ),
            )
            user.id = cursor.lastrowid
            logger.debug("user_inserted", user_id=user.id)
            return user

    async def get_user(self, user_id: int) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = ?",
                (user_id,),
            )
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_credentials(self, username: str) -> UserCredentials | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT {USER_COLUMNS}, password_hash FROM users WHERE username = ?",
                (username,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return UserCredentials(
                user=self._row_to_user(row),
                password_hash=row["password_hash"],
            )

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            full_name=row["full_name"],
            created_at=from_db(row["created_at"]),
            updated_at=from_db(row["updated_at"]),
        )
