"""Application services over the repositories."""

from src.services.demands import DemandService
from src.services.production_orders import ProductionOrderService
from src.services.reports import ReportService
from src.services.skus import SkuService

__all__ = [
    "DemandService",
    "ProductionOrderService",
    "ReportService",
    "SkuService",
]
