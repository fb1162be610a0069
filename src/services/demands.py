"""Demand planning service."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from src.exceptions import DuplicateDemandError, RecordNotFoundError
from src.models.catalog import BulkDeleteResponse, Demand, DemandRequest, utcnow
from src.repositories.base import DemandRepository, SkuRepository
from src.services.skus import new_id

logger = logging.getLogger(__name__)


class DemandService:
    """Create, update and delete monthly demands (one per SKU and month)."""

    def __init__(
        self,
        demands: DemandRepository,
        skus: SkuRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.demands = demands
        self.skus = skus
        self._clock = clock

    async def get_demand(self, demand_id: str) -> Demand:
        demand = await self.demands.get(demand_id)
        if demand is None:
            raise RecordNotFoundError("Demand", demand_id)
        return demand

    async def create_demand(self, request: DemandRequest) -> Demand:
        await self._ensure_sku_exists(request.sku_id)
        await self._ensure_unique(request.sku_id, request.month_year)
        now = self._clock()
        demand = Demand(
            id=new_id("dem"),
            sku_id=request.sku_id,
            month_year=request.month_year,
            target_quantity=request.target_quantity,
            created_at=now,
            updated_at=now,
        )
        await self.demands.put(demand)
        logger.info(
            "Created demand %s: SKU %s, %s, target %d",
            demand.id, demand.sku_id, demand.month_year, demand.target_quantity,
        )
        return demand

    async def update_demand(self, demand_id: str, request: DemandRequest) -> Demand:
        demand = await self.get_demand(demand_id)
        await self._ensure_sku_exists(request.sku_id)
        if (request.sku_id, request.month_year) != (demand.sku_id, demand.month_year):
            await self._ensure_unique(request.sku_id, request.month_year, exclude_id=demand_id)

        updated = demand.model_copy(
            update={
                "sku_id": request.sku_id,
                "month_year": request.month_year,
                "target_quantity": request.target_quantity,
                "updated_at": self._clock(),
            }
        )
        await self.demands.put(updated)
        logger.info("Updated demand %s", demand_id)
        return updated

    async def delete_demand(self, demand_id: str) -> None:
        if not await self.demands.delete(demand_id):
            raise RecordNotFoundError("Demand", demand_id)
        logger.info("Deleted demand %s", demand_id)

    async def delete_demands(self, demand_ids: list[str]) -> BulkDeleteResponse:
        unique_ids = list(dict.fromkeys(demand_ids))
        deleted = await self.demands.delete_many(unique_ids)
        result = BulkDeleteResponse(deleted=deleted, not_found=len(unique_ids) - deleted)
        log = logger.warning if result.has_skipped else logger.info
        log("Bulk demand delete: %d deleted, %d not found", result.deleted, result.not_found)
        return result

    async def _ensure_sku_exists(self, sku_id: str) -> None:
        if await self.skus.get(sku_id) is None:
            raise RecordNotFoundError("SKU", sku_id)

    async def _ensure_unique(self, sku_id: str, month_year: str, exclude_id: str | None = None) -> None:
        existing = await self.demands.find_by_sku_and_month(sku_id, month_year)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateDemandError(f"A demand already exists for SKU {sku_id} in {month_year}")
