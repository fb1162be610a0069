"""Demand progress: delivered units against each monthly target."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import tzinfo
from typing import Iterable

from src.analytics.lookups import build_sku_code_map, delivered_units, is_delivered, sku_label
from src.analytics.months import UTC, format_month_key, month_key_of, parse_month_key
from src.exceptions import InvalidMonthKeyError
from src.models.catalog import Demand, ProductionOrder, Sku
from src.models.reports import DemandWithProgress

logger = logging.getLogger(__name__)


def progress_percentage(produced: int, target: int) -> float:
    """produced / target as a percentage clamped to [0, 100]; 0 for no target."""
    if target <= 0:
        return 0.0
    return min(100.0, max(0.0, produced / target * 100))


def delivered_by_sku_month(
    production_orders: Iterable[ProductionOrder], tz: tzinfo = UTC
) -> dict[tuple[str, str], int]:
    """Sum deliveries of completed orders per (sku_id, completion month)."""
    totals: dict[tuple[str, str], int] = defaultdict(int)
    for order in production_orders:
        if not is_delivered(order):
            continue
        totals[(order.sku_id, month_key_of(order.end_time, tz))] += delivered_units(order)
    return totals


def compute_demand_progress(
    demands: Iterable[Demand],
    production_orders: Iterable[ProductionOrder],
    skus: Iterable[Sku] = (),
    tz: tzinfo = UTC,
) -> list[DemandWithProgress]:
    """Attach produced quantity and progress to every demand.

    Only completed orders count, bucketed by the month of their end_time in
    ``tz``. Demands with a malformed month key or a deleted SKU are kept with
    zero progress / a sentinel SKU label.

    Sorted by month descending, then SKU code ascending.
    """
    codes = build_sku_code_map(skus)
    delivered = delivered_by_sku_month(production_orders, tz)

    results: list[DemandWithProgress] = []
    for demand in demands:
        try:
            year, month = parse_month_key(demand.month_year)
        except InvalidMonthKeyError:
            logger.warning(
                "Demand %s has malformed month %r, reporting zero progress",
                demand.id, demand.month_year,
            )
            produced = 0
        else:
            produced = delivered.get((demand.sku_id, format_month_key(year, month)), 0)

        results.append(
            DemandWithProgress(
                **demand.model_dump(),
                sku_code=sku_label(demand.sku_id, codes),
                produced_quantity=produced,
                progress_percentage=progress_percentage(produced, demand.target_quantity),
            )
        )

    results.sort(key=lambda item: item.sku_code)
    results.sort(key=lambda item: item.month_year, reverse=True)

    logger.debug("Computed progress for %d demands", len(results))
    return results
