"""Report service: loads the collections and runs the calculators."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from src.analytics import (
    compute_abc_classification,
    compute_dashboard_summary,
    compute_demand_progress,
)
from src.config import ReportingConfig
from src.models.catalog import Demand, ProductionOrder, Sku, utcnow
from src.models.reports import DashboardSummary, DemandWithProgress, PerformanceSkuData
from src.repositories.base import DemandRepository, ProductionOrderRepository, SkuRepository

logger = logging.getLogger(__name__)


class ReportService:
    """Fetch SKUs, orders and demands concurrently, then aggregate in memory."""

    def __init__(
        self,
        skus: SkuRepository,
        production_orders: ProductionOrderRepository,
        demands: DemandRepository,
        reporting: Optional[ReportingConfig] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.skus = skus
        self.production_orders = production_orders
        self.demands = demands
        self.reporting = reporting or ReportingConfig()
        self._clock = clock

    async def _load(self) -> tuple[list[Sku], list[ProductionOrder], list[Demand]]:
        skus, orders, demands = await asyncio.gather(
            self.skus.list(),
            self.production_orders.list(),
            self.demands.list(),
        )
        logger.debug("Loaded %d SKUs, %d orders, %d demands", len(skus), len(orders), len(demands))
        return skus, orders, demands

    async def demand_progress(self) -> list[DemandWithProgress]:
        skus, orders, demands = await self._load()
        return compute_demand_progress(demands, orders, skus, tz=self.reporting.tzinfo)

    async def performance(self) -> list[PerformanceSkuData]:
        skus, orders, _ = await self._load()
        return compute_abc_classification(skus, orders)

    async def dashboard(self, window_months: Optional[int] = None) -> DashboardSummary:
        skus, orders, demands = await self._load()
        return compute_dashboard_summary(
            skus,
            orders,
            demands,
            now=self._clock(),
            window_months=window_months or self.reporting.dashboard_window_months,
            tz=self.reporting.tzinfo,
            critical_threshold=self.reporting.critical_progress_threshold,
        )
