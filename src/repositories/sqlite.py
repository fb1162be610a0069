"""SQLite implementations of the repositories.

Each record is stored as a JSON document in its collection table, next to
the handful of columns the lookups filter on (see database/schema.sql).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, Optional, Type

from src.database.connection import Database
from src.exceptions import DuplicateDemandError, DuplicateSkuCodeError, IntegrityViolationError
from src.models.catalog import Demand, ProductionOrder, Sku
from src.repositories.base import (
    DemandRepository,
    ProductionOrderRepository,
    SkuRepository,
    T,
)

logger = logging.getLogger(__name__)


def _timestamp(value: datetime) -> str:
    """UTC ISO timestamp so text ordering matches time ordering."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


class SqliteRepository(Generic[T]):
    """Shared list/get/put/delete over one collection table."""

    table: ClassVar[str]
    model: ClassVar[Type[Any]]

    def __init__(self, db: Database):
        self.db = db

    def _index_columns(self, record: T) -> dict[str, Any]:
        """Extra indexed columns written alongside the document."""
        return {}

    def _to_record(self, row) -> T:
        return self.model.model_validate_json(row[0])

    async def _select(self, where: str = "", params=None) -> list[T]:
        rows = await self.db.execute_read(
            f"SELECT data FROM {self.table} {where} ORDER BY created_at DESC, id",
            params or [],
        )
        return [self._to_record(row) for row in rows]

    async def _count(self, where: str, params) -> int:
        rows = await self.db.execute_read(f"SELECT COUNT(*) FROM {self.table} {where}", params)
        return rows[0][0] if rows else 0

    async def list(self) -> list[T]:
        return await self._select()

    async def get(self, record_id: str) -> Optional[T]:
        records = await self._select("WHERE id = ?", [record_id])
        return records[0] if records else None

    async def put(self, record: T) -> T:
        columns = {
            "id": record.id,
            **self._index_columns(record),
            "data": record.model_dump_json(),
            "created_at": _timestamp(record.created_at),
            "updated_at": _timestamp(record.updated_at),
        }
        names = ", ".join(columns)
        placeholders = ", ".join(["?"] * len(columns))
        updates = ", ".join(f"{name} = excluded.{name}" for name in columns if name != "id")
        await self.db.execute_write(
            f"""
            INSERT INTO {self.table} ({names}) VALUES ({placeholders})
            ON CONFLICT(id) DO UPDATE SET {updates}
            """,
            list(columns.values()),
        )
        return record

    async def delete(self, record_id: str) -> bool:
        if await self._count("WHERE id = ?", [record_id]) == 0:
            return False
        await self.db.execute_write(f"DELETE FROM {self.table} WHERE id = ?", [record_id])
        logger.debug("Deleted %s from %s", record_id, self.table)
        return True

    async def delete_many(self, record_ids: list[str]) -> int:
        if not record_ids:
            return 0
        placeholders = ", ".join(["?"] * len(record_ids))
        existing = await self._count(f"WHERE id IN ({placeholders})", list(record_ids))
        async with self.db.transaction():
            for record_id in record_ids:
                await self.db.execute_write_no_commit(
                    f"DELETE FROM {self.table} WHERE id = ?", [record_id]
                )
        logger.debug("Deleted %d records from %s", existing, self.table)
        return existing


class SqliteSkuRepository(SqliteRepository[Sku], SkuRepository):
    table = "skus"
    model = Sku

    def _index_columns(self, record: Sku) -> dict[str, Any]:
        return {"code": record.code}

    async def put(self, record: Sku) -> Sku:
        try:
            return await super().put(record)
        except IntegrityViolationError as exc:
            raise DuplicateSkuCodeError(f"SKU code already exists: {record.code}") from exc

    async def find_by_code(self, code: str) -> Optional[Sku]:
        records = await self._select("WHERE code = ? COLLATE NOCASE", [code])
        return records[0] if records else None


class SqliteProductionOrderRepository(SqliteRepository[ProductionOrder], ProductionOrderRepository):
    table = "production_orders"
    model = ProductionOrder

    def _index_columns(self, record: ProductionOrder) -> dict[str, Any]:
        return {"sku_id": record.sku_id, "status": record.status.value}

    async def count_by_sku(self, sku_id: str) -> int:
        return await self._count("WHERE sku_id = ?", [sku_id])


class SqliteDemandRepository(SqliteRepository[Demand], DemandRepository):
    table = "demands"
    model = Demand

    def _index_columns(self, record: Demand) -> dict[str, Any]:
        return {"sku_id": record.sku_id, "month_year": record.month_year}

    async def put(self, record: Demand) -> Demand:
        try:
            return await super().put(record)
        except IntegrityViolationError as exc:
            raise DuplicateDemandError(
                f"A demand already exists for SKU {record.sku_id} in {record.month_year}"
            ) from exc

    async def find_by_sku_and_month(self, sku_id: str, month_year: str) -> Optional[Demand]:
        records = await self._select("WHERE sku_id = ? AND month_year = ?", [sku_id, month_year])
        return records[0] if records else None

    async def count_by_sku(self, sku_id: str) -> int:
        return await self._count("WHERE sku_id = ?", [sku_id])
