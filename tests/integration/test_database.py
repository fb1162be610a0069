"""Integration tests for database operations."""

import pytest

from src.exceptions import DatabaseError, IntegrityViolationError


class TestDatabaseConnection:
    """Tests for Database class connection and schema."""

    @pytest.mark.asyncio
    async def test_connect_creates_tables(self, temp_db_path):
        """Test connect() creates schema tables."""
        from src.database.connection import Database

        db = Database(temp_db_path)
        await db.connect()

        rows = await db.execute_read("SELECT name FROM sqlite_master WHERE type='table'")
        table_names = [row[0] for row in rows]

        assert "skus" in table_names
        assert "production_orders" in table_names
        assert "demands" in table_names

        await db.close()

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, temp_db_path):
        """Test connect() can be called multiple times."""
        from src.database.connection import Database

        db = Database(temp_db_path)
        await db.connect()
        await db.connect()  # Should not raise

        rows = await db.execute_read("SELECT 1")
        assert rows[0][0] == 1

        await db.close()

    @pytest.mark.asyncio
    async def test_schema_survives_reconnect(self, temp_db_path):
        """Schema uses IF NOT EXISTS so reopening keeps data."""
        from src.database.connection import Database

        db = Database(temp_db_path)
        await db.connect()
        await db.execute_write(
            "INSERT INTO skus (id, code, data, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
            ["s1", "A", "{}", "2024-01-01", "2024-01-01"],
        )
        await db.close()

        db = Database(temp_db_path)
        await db.connect()
        rows = await db.execute_read("SELECT id FROM skus")
        assert rows == [("s1",)]
        await db.close()

    @pytest.mark.asyncio
    async def test_not_connected_raises(self, temp_db_path):
        from src.database.connection import Database

        db = Database(temp_db_path)
        with pytest.raises(DatabaseError):
            await db.execute_read("SELECT 1")


class TestDatabaseReadWrite:
    """Tests for Database read/write operations."""

    @pytest.mark.asyncio
    async def test_execute_read(self, test_database):
        rows = await test_database.execute_read("SELECT 1 + 1 as result")
        assert rows[0][0] == 2

    @pytest.mark.asyncio
    async def test_execute_read_with_params(self, test_database):
        rows = await test_database.execute_read("SELECT ? + ? as result", [5, 10])
        assert rows[0][0] == 15

    @pytest.mark.asyncio
    async def test_unique_code_violation_wrapped(self, test_database):
        """Case-insensitive unique index on SKU codes surfaces as DatabaseError."""
        insert = "INSERT INTO skus (id, code, data, created_at, updated_at) VALUES (?, ?, ?, ?, ?)"
        await test_database.execute_write(insert, ["s1", "PNL-001", "{}", "t", "t"])
        with pytest.raises(DatabaseError):
            await test_database.execute_write(insert, ["s2", "pnl-001", "{}", "t", "t"])

    @pytest.mark.asyncio
    async def test_unique_violation_is_integrity_error(self, test_database):
        insert = "INSERT INTO skus (id, code, data, created_at, updated_at) VALUES (?, ?, ?, ?, ?)"
        await test_database.execute_write(insert, ["s1", "PNL-001", "{}", "t", "t"])
        with pytest.raises(IntegrityViolationError):
            await test_database.execute_write(insert, ["s2", "PNL-001", "{}", "t", "t"])
        rows = await test_database.execute_read("SELECT id FROM skus")
        assert rows == [("s1",)]


class TestTransaction:
    """Tests for explicit transactions."""

    @pytest.mark.asyncio
    async def test_commit_on_success(self, test_database):
        async with test_database.transaction():
            await test_database.execute_write_no_commit(
                "INSERT INTO skus (id, code, data, created_at, updated_at) VALUES ('s1', 'A', '{}', 't', 't')"
            )
        rows = await test_database.execute_read("SELECT COUNT(*) FROM skus")
        assert rows[0][0] == 1

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, test_database):
        with pytest.raises(RuntimeError):
            async with test_database.transaction():
                await test_database.execute_write_no_commit(
                    "INSERT INTO skus (id, code, data, created_at, updated_at) VALUES ('s1', 'A', '{}', 't', 't')"
                )
                raise RuntimeError("boom")
        rows = await test_database.execute_read("SELECT COUNT(*) FROM skus")
        assert rows[0][0] == 0

    @pytest.mark.asyncio
    async def test_sqlite_error_rolls_back_whole_batch(self, test_database):
        insert = "INSERT INTO skus (id, code, data, created_at, updated_at) VALUES (?, ?, ?, ?, ?)"
        with pytest.raises(DatabaseError, match="Transaction failed"):
            async with test_database.transaction():
                await test_database.execute_write_no_commit(insert, ["s1", "A", "{}", "t", "t"])
                await test_database.execute_write_no_commit(insert, ["s2", "a", "{}", "t", "t"])
        rows = await test_database.execute_read("SELECT COUNT(*) FROM skus")
        assert rows[0][0] == 0
