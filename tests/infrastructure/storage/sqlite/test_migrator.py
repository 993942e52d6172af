"""Unit tests for the database migrator."""

from pathlib import Path

import aiosqlite
import pytest

from stockopname.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    ChecksumMismatch,
    MigrationInfo,
    create_backup,
    discover_migrations,
    get_applied_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    pending_migrations,
    restore_backup,
    verify_schema_integrity,
)


class TestMigrationInfo:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v001_initial_schema.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "001"
        assert info.name == "initial_schema"
        assert len(info.checksum) == 16

    def test_checksum_tracks_content(self, tmp_path: Path):
        first = tmp_path / "v001_a.sql"
        second = tmp_path / "v002_b.sql"
        first.write_text("SELECT 1;")
        second.write_text("SELECT 2;")
        assert MigrationInfo.from_file(first).checksum != MigrationInfo.from_file(second).checksum

    @pytest.mark.parametrize("filename", ["initial.sql", "v001.sql", "vX_name.sql", "v001_name.sql.bak"])
    def test_invalid_filename(self, tmp_path: Path, filename: str):
        path = tmp_path / filename
        path.write_text("SELECT 1;")
        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(path)


class TestDiscoverMigrations:
    def test_sorted_and_skips_invalid(self, tmp_path: Path):
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "vbad.sql").write_text("SELECT 3;")

        migrations = discover_migrations(tmp_path)

        assert [m.version for m in migrations] == ["001", "002"]

    def test_bundled_migrations(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"


class TestInitializeDatabase:
    async def test_fresh_database(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert [r.version for r in results] == ["001"]
        assert all(r.success for r in results)

        async with aiosqlite.connect(temp_db_path) as conn:
            assert await get_current_version(conn) == "001"
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert set(REQUIRED_TABLES) <= tables

    async def test_idempotent(self, initialized_db: Path):
        assert await initialize_database(initialized_db, create_backup_before=False) == []

    async def test_backup_removed_after_success(self, initialized_db: Path):
        await initialize_database(initialized_db, create_backup_before=True)
        assert list(initialized_db.parent.glob("*.backup_*")) == []

    async def test_checksum_mismatch_stops(self, initialized_db: Path):
        async with aiosqlite.connect(initialized_db) as conn:
            await conn.execute("UPDATE schema_migrations SET checksum = 'tampered'")
            await conn.commit()

        assert await initialize_database(initialized_db, create_backup_before=False) == []

        async with aiosqlite.connect(initialized_db) as conn:
            assert (await get_applied_migrations(conn)) == {"001": "tampered"}

    async def test_creates_parent_directory(self, tmp_path: Path):
        db_path = tmp_path / "deep" / "dir" / "stock.db"
        await initialize_database(db_path, create_backup_before=False)
        assert db_path.exists()


class TestAppliedMigrations:
    async def test_empty_without_table(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            assert await get_applied_migrations(conn) == {}
            assert await get_current_version(conn) is None


class TestBackups:
    def test_create_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "stock.db"
        db_path.write_bytes(b"original")

        backup = create_backup(db_path)
        assert backup.exists()
        assert "backup_" in backup.name

        db_path.write_bytes(b"corrupted")
        restore_backup(db_path, backup)
        assert db_path.read_bytes() == b"original"


class TestStatusAndIntegrity:
    async def test_status_without_database(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False
        assert status["pending_migrations"][0] == "001"

    async def test_status_after_migration(self, initialized_db: Path):
        status = await get_migration_status(initialized_db)
        assert status["exists"] is True
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []

    async def test_integrity_checks_pass(self, initialized_db: Path):
        checks = await verify_schema_integrity(initialized_db)
        assert {c["check"] for c in checks} == {"foreign_keys", "integrity", "required_tables"}
        assert all(c["status"] == "PASS" for c in checks)

    async def test_missing_table_reported(self, initialized_db: Path):
        async with aiosqlite.connect(initialized_db) as conn:
            await conn.execute("DROP TABLE stock_opname_items")
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(initialized_db)}
        assert checks["required_tables"]["status"] == "FAIL"
        assert checks["required_tables"]["missing"] == ["stock_opname_items"]


class TestPendingMigrations:
    def _migrations(self, tmp_path: Path) -> list[MigrationInfo]:
        (tmp_path / "v001_first.sql").write_text("SELECT 1;")
        (tmp_path / "v002_second.sql").write_text("SELECT 2;")
        return discover_migrations(tmp_path)

    def test_skips_applied(self, tmp_path: Path):
        migrations = self._migrations(tmp_path)
        applied = {"001": migrations[0].checksum}
        assert [m.version for m in pending_migrations(migrations, applied)] == ["002"]

    def test_edited_script_refused(self, tmp_path: Path):
        migrations = self._migrations(tmp_path)
        with pytest.raises(ChecksumMismatch) as exc_info:
            list(pending_migrations(migrations, {"001": "0000000000000000"}))
        assert exc_info.value.migration.version == "001"

    def test_numeric_ordering(self, tmp_path: Path):
        (tmp_path / "v10_later.sql").write_text("SELECT 10;")
        (tmp_path / "v9_earlier.sql").write_text("SELECT 9;")
        assert [m.version for m in discover_migrations(tmp_path)] == ["9", "10"]
