"""Database connection utilities."""

from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.exceptions import DatabaseError, IntegrityViolationError


class Database:
    """Async SQLite database wrapper."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        if self._connection is not None:
            return
        self._connection = await aiosqlite.connect(self.db_path)
        await self._init_schema()

    async def _init_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        schema = schema_path.read_text(encoding="utf-8")
        await self._connection.executescript(schema)
        await self._connection.commit()

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise DatabaseError("Database is not connected")
        return self._connection

    async def execute_read(self, query: str, params=None):
        """Execute a read query and return all results."""
        async with self.connection.execute(query, params or []) as cursor:
            return await cursor.fetchall()

    async def execute_write(self, query: str, params=None) -> None:
        try:
            await self.connection.execute(query, params or [])
            await self.connection.commit()
        except sqlite3.IntegrityError as exc:
            await self.connection.rollback()
            raise IntegrityViolationError(f"Constraint violated: {exc}") from exc
        except sqlite3.Error as exc:
            await self.connection.rollback()
            raise DatabaseError(f"Write failed: {exc}") from exc

    # =========================================================================
    # Transaction support for atomic batch operations
    # =========================================================================

    @asynccontextmanager
    async def transaction(self):
        """Context manager for explicit transaction control.

        Usage:
            async with db.transaction():
                await db.execute_write_no_commit(...)
            # Commits on exit, rolls back on exception
        """
        try:
            yield
            await self.connection.commit()
        except sqlite3.Error as exc:
            await self.connection.rollback()
            raise DatabaseError(f"Transaction failed: {exc}") from exc
        except Exception:
            await self.connection.rollback()
            raise

    async def execute_write_no_commit(self, query: str, params=None) -> None:
        """Execute write without immediate commit (use within transaction)."""
        await self.connection.execute(query, params or [])

    async def close(self) -> None:
        if self._connection:
            await self._connection.close()
            self._connection = None
