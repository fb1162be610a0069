"""Pydantic models for PCP Tracker."""

from src.models.catalog import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    CompleteOrderRequest,
    Demand,
    DemandRequest,
    ProductionOrder,
    ProductionOrderRequest,
    ProductionOrderStatus,
    ProductionOrderWithSku,
    Sku,
    SkuRequest,
)
from src.models.reports import (
    DashboardSummary,
    DemandWithProgress,
    MonthlyProductionPoint,
    PerformanceSkuData,
)

__all__ = [
    "BulkDeleteRequest",
    "BulkDeleteResponse",
    "CompleteOrderRequest",
    "Demand",
    "DemandRequest",
    "ProductionOrder",
    "ProductionOrderRequest",
    "ProductionOrderStatus",
    "ProductionOrderWithSku",
    "Sku",
    "SkuRequest",
    "DashboardSummary",
    "DemandWithProgress",
    "MonthlyProductionPoint",
    "PerformanceSkuData",
]
