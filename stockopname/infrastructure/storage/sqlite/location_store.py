"""SQLite implementation of location storage."""

import aiosqlite

from stockopname.config import get_logger
from stockopname.core.entities import Location
from stockopname.core.exceptions import LocationNotFoundError
from stockopname.core.interfaces import ILocationStore
from stockopname.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from stockopname.infrastructure.storage.sqlite.timestamps import from_db, to_db

logger = get_logger(__name__)


class SQLiteLocationStore(ILocationStore):
    """SQLite implementation of location storage."""

    async def create_location(self, location: Location) -> Location:
        async with get_transaction("create_location") as conn:
            cursor = await conn.execute(
                """
                INSERT INTO locations (name, code, description, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    location.name,
                    location.code,
                    location.description,
                    to_db(location.created_at),
                    to_db(location.updated_at),
                ),
            )
            location.id = cursor.lastrowid
            logger.debug("location_inserted", location_id=location.id, code=location.code)
            return location

    async def get_location(self, location_id: int) -> Location | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM locations WHERE id = ?",
                (location_id,),
            )
            row = await cursor.fetchone()
            return self._row_to_location(row) if row else None

    async def get_location_by_code(self, code: str) -> Location | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM locations WHERE code = ?",
                (code,),
            )
            row = await cursor.fetchone()
            return self._row_to_location(row) if row else None

    async def list_locations(self) -> list[Location]:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM locations ORDER BY name, id")
            rows = await cursor.fetchall()
            return [self._row_to_location(row) for row in rows]

    async def update_location(self, location: Location) -> Location:
        async with get_transaction("update_location") as conn:
            cursor = await conn.execute(
                """
                UPDATE locations SET name = ?, description = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    location.name,
                    location.description,
                    to_db(location.updated_at),
                    location.id,
                ),
            )
            if cursor.rowcount == 0:
                raise LocationNotFoundError(location.id)
            return location

    @staticmethod
    def _row_to_location(row: aiosqlite.Row) -> Location:
        return Location(
            id=row["id"],
            name=row["name"],
            code=row["code"],
            description=row["description"],
            created_at=from_db(row["created_at"]),
            updated_at=from_db(row["updated_at"]),
        )
