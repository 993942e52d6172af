"""
Versioned SQL migrations for the stock opname database.

Scripts live beside this module as ``vNNN_<name>.sql`` and are recorded in
``schema_migrations`` with a content checksum. An applied script whose file
has since changed stops the run instead of being re-applied. An existing
database file is copied aside before migrating and put back if a script
fails.
"""

import argparse
import asyncio
import hashlib
import re
import shutil
import time
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from stockopname.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "schema_migrations",
    "users",
    "locations",
    "stock_opname_sessions",
    "stock_opname_items",
)


@dataclass
class MigrationInfo:
    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILENAME.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(version=match[1], name=match[2], path=path, checksum=digest[:16])

    def script(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


class ChecksumMismatch(Exception):
    """An applied migration's file no longer matches what was recorded."""

    def __init__(self, migration: MigrationInfo, recorded: str):
        super().__init__(f"v{migration.version} changed since it was applied")
        self.migration = migration
        self.recorded = recorded


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration scripts in ``directory`` ordered by version; bad names are skipped."""
    found = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as exc:
            logger.warning("migration_file_ignored", path=str(path), reason=str(exc))
    return sorted(found, key=lambda m: int(m.version))


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Recorded ``version -> checksum``; empty before the first migration."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations ORDER BY version")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied, default=None)


def pending_migrations(
    migrations: list[MigrationInfo], applied: dict[str, str]
) -> Iterator[MigrationInfo]:
    """Yield the migrations still to run, refusing to pass an edited one."""
    for migration in migrations:
        recorded = applied.get(migration.version)
        if recorded is None:
            yield migration
        elif recorded != migration.checksum:
            raise ChecksumMismatch(migration, recorded)


async def apply_migration(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    """Run one script and record it; a failure is rolled back and reported."""
    started = time.monotonic()

    def elapsed() -> int:
        return int((time.monotonic() - started) * 1000)

    try:
        await conn.executescript(migration.script())
        await conn.execute(
            "INSERT OR REPLACE INTO schema_migrations "
            "(version, name, checksum, applied_at, execution_time_ms) VALUES (?, ?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, datetime.now(UTC).isoformat(), elapsed()),
        )
        await conn.commit()
    except aiosqlite.Error as exc:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(exc))
        return MigrationResult(migration.version, migration.name, False, elapsed(), str(exc))

    logger.info("migration_applied", version=migration.version, name=migration.name, ms=elapsed())
    return MigrationResult(migration.version, migration.name, True, elapsed())


async def count_foreign_key_violations(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    return len(await cursor.fetchall())


def create_backup(db_path: Path) -> Path:
    stamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backed_up", backup=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored", backup=str(backup_path))


async def _migrate(db_path: Path) -> list[MigrationResult]:
    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")

        applied = await get_applied_migrations(conn)
        try:
            for migration in pending_migrations(discover_migrations(), applied):
                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
                violations = await count_foreign_key_violations(conn)
                if violations:
                    logger.error("foreign_key_violations", version=migration.version, rows=violations)
                    break
        except ChecksumMismatch as exc:
            logger.error(
                "migration_checksum_mismatch",
                version=exc.migration.version,
                recorded=exc.recorded,
                current=exc.migration.checksum,
            )
    return results


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring ``db_path`` (default: the configured database) up to date.

    Returns the result of every migration attempted in this call; an empty
    list means nothing was pending. Only results with ``success=False``
    trigger the backup restore; an unexpected exception restores and
    re-raises.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    backup = create_backup(db_path) if create_backup_before and db_path.exists() else None
    try:
        results = await _migrate(db_path)
    except Exception:
        logger.exception("database_initialization_failed", db_path=str(db_path))
        if backup is not None:
            restore_backup(db_path, backup)
        raise

    if backup is not None:
        if all(r.success for r in results):
            backup.unlink()
        else:
            restore_backup(db_path, backup)

    logger.info("database_initialized", db_path=str(db_path), applied=[r.version for r in results])
    return results


async def get_migration_status(db_path: Path | None = None) -> dict[str, Any]:
    db_path = db_path or get_settings().storage.db_path
    known = [m.version for m in discover_migrations()]

    applied: dict[str, str] = {}
    if db_path.exists():
        async with aiosqlite.connect(db_path) as conn:
            applied = await get_applied_migrations(conn)

    return {
        "exists": db_path.exists(),
        "current_version": max(applied, default=None),
        "applied_migrations": list(applied),
        "pending_migrations": [v for v in known if v not in applied],
        "total_migrations": len(known),
    }


async def _check_foreign_keys(conn: aiosqlite.Connection) -> dict[str, Any]:
    violations = await count_foreign_key_violations(conn)
    return {"check": "foreign_keys", "status": "FAIL" if violations else "PASS", "violations": violations}


async def _check_integrity(conn: aiosqlite.Connection) -> dict[str, Any]:
    cursor = await conn.execute("PRAGMA integrity_check")
    (outcome,) = await cursor.fetchone()
    return {"check": "integrity", "status": "PASS" if outcome == "ok" else "FAIL", "result": outcome}


async def _check_required_tables(conn: aiosqlite.Connection) -> dict[str, Any]:
    cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    present = {name for (name,) in await cursor.fetchall()}
    missing = [table for table in REQUIRED_TABLES if table not in present]
    return {"check": "required_tables", "status": "FAIL" if missing else "PASS", "missing": missing}


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict[str, Any]]:
    db_path = db_path or get_settings().storage.db_path
    async with aiosqlite.connect(db_path) as conn:
        return [
            await _check_foreign_keys(conn),
            await _check_integrity(conn),
            await _check_required_tables(conn),
        ]


async def _run_cli(args: argparse.Namespace) -> None:
    if args.status:
        status = await get_migration_status(args.db_path)
        for key in ("exists", "current_version", "applied_migrations", "pending_migrations"):
            print(f"{key}: {status[key]}")
        return

    if args.verify:
        for check in await verify_schema_integrity(args.db_path):
            extra = {k: v for k, v in check.items() if k not in ("check", "status")}
            print(f"[{check['status']}] {check['check']} {extra if check['status'] != 'PASS' else ''}")
        return

    results = await initialize_database(args.db_path, create_backup_before=not args.no_backup)
    if not results:
        print("Database is up to date")
    for result in results:
        outcome = "ok" if result.success else f"FAILED: {result.error}"
        print(f"v{result.version} {result.name} ({result.execution_time_ms}ms) {outcome}")


def main() -> None:
    """``stockopname-migrate`` console script."""
    parser = argparse.ArgumentParser(description="Stock opname database migrations")
    parser.add_argument("--db-path", type=Path, help="database file (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="show applied and pending migrations")
    mode.add_argument("--verify", action="store_true", help="run schema integrity checks")
    parser.add_argument("--no-backup", action="store_true", help="skip the pre-migration backup")
    asyncio.run(_run_cli(parser.parse_args()))
