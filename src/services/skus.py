"""SKU catalog service."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable
from uuid import uuid4

from src.exceptions import DuplicateSkuCodeError, RecordNotFoundError, SkuInUseError
from src.models.catalog import BulkDeleteResponse, Sku, SkuRequest, utcnow
from src.repositories.base import DemandRepository, ProductionOrderRepository, SkuRepository

logger = logging.getLogger(__name__)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


class SkuService:
    """Create, update and delete SKUs.

    Codes are unique case-insensitively. A SKU referenced by any production
    order or demand cannot be deleted.
    """

    def __init__(
        self,
        skus: SkuRepository,
        production_orders: ProductionOrderRepository,
        demands: DemandRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.skus = skus
        self.production_orders = production_orders
        self.demands = demands
        self._clock = clock

    async def list_skus(self) -> list[Sku]:
        return await self.skus.list()

    async def get_sku(self, sku_id: str) -> Sku:
        sku = await self.skus.get(sku_id)
        if sku is None:
            raise RecordNotFoundError("SKU", sku_id)
        return sku

    async def create_sku(self, request: SkuRequest) -> Sku:
        await self._ensure_code_available(request.code)
        now = self._clock()
        sku = Sku(
            id=new_id("sku"),
            code=request.code,
            description=request.description,
            unit_of_measure=request.unit_of_measure,
            created_at=now,
            updated_at=now,
        )
        await self.skus.put(sku)
        logger.info("Created SKU %s (%s)", sku.code, sku.id)
        return sku

    async def update_sku(self, sku_id: str, request: SkuRequest) -> Sku:
        sku = await self.get_sku(sku_id)
        await self._ensure_code_available(request.code, exclude_id=sku_id)
        updated = sku.model_copy(
            update={
                "code": request.code,
                "description": request.description,
                "unit_of_measure": request.unit_of_measure,
                "updated_at": self._clock(),
            }
        )
        await self.skus.put(updated)
        logger.info("Updated SKU %s (%s)", updated.code, sku_id)
        return updated

    async def delete_sku(self, sku_id: str) -> None:
        sku = await self.get_sku(sku_id)
        if await self._is_in_use(sku_id):
            logger.warning("Refusing to delete SKU %s: still referenced", sku.code)
            raise SkuInUseError(
                f"SKU {sku.code} is used by production orders or demands"
            )
        await self.skus.delete(sku_id)
        logger.info("Deleted SKU %s (%s)", sku.code, sku_id)

    async def delete_skus(self, sku_ids: list[str]) -> BulkDeleteResponse:
        result = BulkDeleteResponse()
        deletable: list[str] = []
        for sku_id in dict.fromkeys(sku_ids):
            if await self.skus.get(sku_id) is None:
                result.not_found += 1
            elif await self._is_in_use(sku_id):
                result.in_use += 1
            else:
                deletable.append(sku_id)
        result.deleted = await self.skus.delete_many(deletable)
        log = logger.warning if result.has_skipped else logger.info
        log(
            "Bulk SKU delete: %d deleted, %d in use, %d not found",
            result.deleted, result.in_use, result.not_found,
        )
        return result

    async def _ensure_code_available(self, code: str, exclude_id: str | None = None) -> None:
        existing = await self.skus.find_by_code(code)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateSkuCodeError(f"SKU code already exists: {code}")

    async def _is_in_use(self, sku_id: str) -> bool:
        order_count, demand_count = await asyncio.gather(
            self.production_orders.count_by_sku(sku_id),
            self.demands.count_by_sku(sku_id),
        )
        return order_count > 0 or demand_count > 0
