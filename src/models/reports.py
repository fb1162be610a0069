"""Pydantic models for derived report data (never stored)."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.models.catalog import Demand

AbcCategory = Literal["A", "B", "C"]


class DemandWithProgress(Demand):
    """Demand joined with what was delivered against it in its month."""

    sku_code: str
    produced_quantity: int = 0
    progress_percentage: float = Field(0.0, ge=0, le=100)


class PerformanceSkuData(BaseModel):
    """One ranked SKU in the ABC classification."""

    sku_id: str
    sku_code: str
    description: str = ""
    unit_of_measure: str = ""
    total_produced: int
    percentage_of_total: float
    cumulative_percentage: float
    abc_category: AbcCategory


class MonthlyProductionPoint(BaseModel):
    """Produced vs target units for one calendar month."""

    month: str = Field(..., description="YYYY-MM")
    label: str
    produced_units: int = 0
    target_units: int = 0


class DashboardSummary(BaseModel):
    """Counters and monthly series shown on the dashboard."""

    total_skus: int
    open_orders: int
    in_progress_orders: int
    critical_demands: int
    status_counts: dict[str, int]
    monthly_production: list[MonthlyProductionPoint]
    window_months: int
    generated_at: datetime
