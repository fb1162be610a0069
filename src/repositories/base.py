"""Repository interfaces for the three stored collections.

Services and reports depend on these, never on a concrete store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

from src.models.catalog import Demand, ProductionOrder, Sku

T = TypeVar("T", bound=BaseModel)


class Repository(ABC, Generic[T]):
    """Document-per-record collection."""

    @abstractmethod
    async def list(self) -> list[T]:
        """All records, newest first."""

    @abstractmethod
    async def get(self, record_id: str) -> Optional[T]:
        """Record by id, or None."""

    @abstractmethod
    async def put(self, record: T) -> T:
        """Insert or replace a record."""

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Remove a record; False if it did not exist."""

    @abstractmethod
    async def delete_many(self, record_ids: list[str]) -> int:
        """Remove several records in one transaction; returns how many existed."""


class SkuRepository(Repository[Sku]):
    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Sku]:
        """SKU with this code, compared case-insensitively."""


class ProductionOrderRepository(Repository[ProductionOrder]):
    @abstractmethod
    async def count_by_sku(self, sku_id: str) -> int:
        """Number of orders referencing a SKU."""


class DemandRepository(Repository[Demand]):
    @abstractmethod
    async def find_by_sku_and_month(self, sku_id: str, month_year: str) -> Optional[Demand]:
        """The demand for a SKU in a month, if any."""

    @abstractmethod
    async def count_by_sku(self, sku_id: str) -> int:
        """Number of demands referencing a SKU."""
