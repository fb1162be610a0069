"""Shared lookups for the report calculators."""

from __future__ import annotations

from typing import Iterable

from src.models.catalog import ProductionOrder, ProductionOrderStatus, Sku

MISSING_SKU_LABEL = "N/A"
DELETED_SKU_LABEL = "N/A (deleted)"


def build_sku_code_map(skus: Iterable[Sku]) -> dict[str, str]:
    """Map SKU id -> SKU code for read-time joins."""
    return {sku.id: sku.code or MISSING_SKU_LABEL for sku in skus}


def sku_label(sku_id: str, codes: dict[str, str]) -> str:
    """Resolve a SKU code, degrading to a sentinel for dangling references."""
    if not sku_id:
        return MISSING_SKU_LABEL
    return codes.get(sku_id, DELETED_SKU_LABEL)


def delivered_units(order: ProductionOrder) -> int:
    """Delivered quantity of an order, 0 when not recorded or negative."""
    value = order.delivered_quantity
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


def is_delivered(order: ProductionOrder) -> bool:
    """Completed and carrying a completion instant."""
    return order.status == ProductionOrderStatus.COMPLETED and order.end_time is not None
