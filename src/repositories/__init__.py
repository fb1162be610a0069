"""Repository interfaces and their SQLite implementations."""

from src.repositories.base import (
    DemandRepository,
    ProductionOrderRepository,
    Repository,
    SkuRepository,
)
from src.repositories.sqlite import (
    SqliteDemandRepository,
    SqliteProductionOrderRepository,
    SqliteSkuRepository,
)

__all__ = [
    "DemandRepository",
    "ProductionOrderRepository",
    "Repository",
    "SkuRepository",
    "SqliteDemandRepository",
    "SqliteProductionOrderRepository",
    "SqliteSkuRepository",
]
