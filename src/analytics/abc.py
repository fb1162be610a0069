"""ABC (Pareto) classification of SKUs by all-time delivered volume.

SKUs are ranked by units delivered. Walking the ranking, each SKU's
cumulative share of total output decides its category:

    cumulative <= 80%  -> A
    cumulative <= 95%  -> B
    otherwise          -> C
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable

from src.analytics.lookups import delivered_units
from src.models.catalog import ProductionOrder, ProductionOrderStatus, Sku
from src.models.reports import AbcCategory, PerformanceSkuData

logger = logging.getLogger(__name__)

A_THRESHOLD = 80.0
B_THRESHOLD = 95.0


def classify(cumulative_percentage: float) -> AbcCategory:
    """Category for a cumulative share; both boundaries are inclusive."""
    if cumulative_percentage <= A_THRESHOLD:
        return "A"
    if cumulative_percentage <= B_THRESHOLD:
        return "B"
    return "C"


def total_produced_by_sku(production_orders: Iterable[ProductionOrder]) -> dict[str, int]:
    """All-time positive deliveries of completed orders per SKU id."""
    totals: dict[str, int] = defaultdict(int)
    for order in production_orders:
        if order.status != ProductionOrderStatus.COMPLETED:
            continue
        units = delivered_units(order)
        if units > 0:
            totals[order.sku_id] += units
    return totals


def compute_abc_classification(
    skus: Iterable[Sku], production_orders: Iterable[ProductionOrder]
) -> list[PerformanceSkuData]:
    """Rank SKUs with output by volume and assign A/B/C categories.

    Ties on volume are broken by SKU code, then id. Cumulative shares come
    from the integer running total so exact boundaries (80%, 95%) are hit
    without float drift.
    """
    totals = total_produced_by_sku(production_orders)

    ranked = [(sku, totals[sku.id]) for sku in skus if totals.get(sku.id, 0) > 0]
    ranked.sort(key=lambda item: (-item[1], item[0].code, item[0].id))

    overall = sum(total for _, total in ranked)
    if overall == 0:
        return []

    results: list[PerformanceSkuData] = []
    running = 0
    for sku, total in ranked:
        running += total
        cumulative = running * 100 / overall
        results.append(
            PerformanceSkuData(
                sku_id=sku.id,
                sku_code=sku.code,
                description=sku.description,
                unit_of_measure=sku.unit_of_measure,
                total_produced=total,
                percentage_of_total=total * 100 / overall,
                cumulative_percentage=cumulative,
                abc_category=classify(cumulative),
            )
        )

    logger.debug("Classified %d SKUs over %d units", len(results), overall)
    return results
