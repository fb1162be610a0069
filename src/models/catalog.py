"""Pydantic models for SKUs, production orders and demands."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

MONTH_KEY_PATTERN = r"^\d{4}-\d{2}$"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductionOrderStatus(str, Enum):
    """Lifecycle states of a production order."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# =============================================================================
# Stored records
# =============================================================================


class Sku(BaseModel):
    """Catalog item (stock-keeping unit)."""

    id: str
    code: str
    description: str = ""
    unit_of_measure: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ProductionOrder(BaseModel):
    """One manufacturing run for a SKU.

    end_time is set once the order is completed or cancelled; delivered_quantity
    only on completion.
    """

    id: str
    sku_id: str
    quantity: int = Field(..., gt=0)
    status: ProductionOrderStatus = ProductionOrderStatus.OPEN
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    delivered_quantity: Optional[int] = Field(None, ge=0)
    total_production_time_ms: Optional[int] = None
    seconds_per_unit: Optional[float] = None
    notes: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Demand(BaseModel):
    """Monthly production target for one SKU.

    month_year is kept as stored; malformed keys are tolerated here and
    handled by the reports.
    """

    id: str
    sku_id: str
    month_year: str
    target_quantity: int = Field(..., gt=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ProductionOrderWithSku(ProductionOrder):
    """Production order joined with its SKU code for listings."""

    sku_code: str


# =============================================================================
# Requests
# =============================================================================


class SkuRequest(BaseModel):
    """Create or update a SKU."""

    code: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=255)
    unit_of_measure: str = Field(..., min_length=1, max_length=10)

    @field_validator("code", "description", "unit_of_measure", mode="before")
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class ProductionOrderRequest(BaseModel):
    """Create or update a production order."""

    sku_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    notes: str = Field("", max_length=500)


class CompleteOrderRequest(BaseModel):
    """Close an in-progress order with the quantity actually delivered."""

    delivered_quantity: int = Field(..., ge=0)


class DemandRequest(BaseModel):
    """Create or update a monthly demand."""

    sku_id: str = Field(..., min_length=1)
    month_year: str = Field(..., pattern=MONTH_KEY_PATTERN, description="YYYY-MM")
    target_quantity: int = Field(..., gt=0)

    @field_validator("month_year")
    def validate_month(cls, value: str) -> str:
        month = int(value[5:7])
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month: {value}")
        return value


class BulkDeleteRequest(BaseModel):
    """Delete several records at once."""

    ids: list[str] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    """Outcome of a bulk delete; skipped records are counted by reason."""

    deleted: int = 0
    in_use: int = 0
    in_progress: int = 0
    not_found: int = 0

    @property
    def has_skipped(self) -> bool:
        return bool(self.in_use or self.in_progress or self.not_found)
