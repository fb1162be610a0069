"""Dashboard summary: status counters, critical demands, monthly series."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Iterable

from src.analytics.demand_progress import compute_demand_progress
from src.analytics.lookups import delivered_units, is_delivered
from src.analytics.months import (
    UTC,
    format_month_key,
    month_key_of,
    month_label,
    month_window,
    shift_month,
    to_local,
)
from src.models.catalog import Demand, ProductionOrder, ProductionOrderStatus, Sku
from src.models.reports import DashboardSummary, DemandWithProgress, MonthlyProductionPoint

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MONTHS = 6
CRITICAL_PROGRESS_THRESHOLD = 25.0


def count_by_status(production_orders: Iterable[ProductionOrder]) -> dict[str, int]:
    """Order count per status; every status is present, zero when unused."""
    counts = {status.value: 0 for status in ProductionOrderStatus}
    for order in production_orders:
        counts[ProductionOrderStatus(order.status).value] += 1
    return counts


def is_critical(
    demand: DemandWithProgress,
    near_months: set[str],
    threshold: float = CRITICAL_PROGRESS_THRESHOLD,
) -> bool:
    """Near-term demand that is far behind its target."""
    return (
        demand.month_year in near_months
        and demand.progress_percentage < threshold
        and demand.produced_quantity < demand.target_quantity
    )


def build_monthly_series(
    production_orders: Iterable[ProductionOrder],
    demands: Iterable[Demand],
    now: datetime,
    window_months: int = DEFAULT_WINDOW_MONTHS,
    tz: tzinfo = UTC,
) -> list[MonthlyProductionPoint]:
    """Zero-filled produced/target buckets for the window ending at ``now``.

    Records whose month falls outside the window are ignored.
    """
    buckets = {
        key: MonthlyProductionPoint(month=key, label=month_label(key))
        for key in month_window(now, window_months, tz)
    }

    for demand in demands:
        bucket = buckets.get(demand.month_year)
        if bucket is not None:
            bucket.target_units += demand.target_quantity

    for order in production_orders:
        if not is_delivered(order):
            continue
        bucket = buckets.get(month_key_of(order.end_time, tz))
        if bucket is not None:
            bucket.produced_units += delivered_units(order)

    return list(buckets.values())


def compute_dashboard_summary(
    skus: Iterable[Sku],
    production_orders: Iterable[ProductionOrder],
    demands: Iterable[Demand],
    now: datetime,
    window_months: int = DEFAULT_WINDOW_MONTHS,
    tz: tzinfo = UTC,
    critical_threshold: float = CRITICAL_PROGRESS_THRESHOLD,
) -> DashboardSummary:
    """Build the dashboard summary as seen at ``now``.

    Raises:
        ValueError: if ``window_months`` is less than 1.
    """
    if window_months < 1:
        raise ValueError(f"window_months must be >= 1, got {window_months}")

    skus = list(skus)
    production_orders = list(production_orders)
    demands = list(demands)

    status_counts = count_by_status(production_orders)

    local_now = to_local(now, tz)
    near_months = {
        format_month_key(local_now.year, local_now.month),
        format_month_key(*shift_month(local_now.year, local_now.month, 1)),
    }
    progress = compute_demand_progress(demands, production_orders, skus, tz=tz)
    critical = sum(1 for demand in progress if is_critical(demand, near_months, critical_threshold))

    series = build_monthly_series(production_orders, demands, now, window_months, tz)

    logger.debug(
        "Dashboard: %d SKUs, %d orders, %d demands (%d critical)",
        len(skus), len(production_orders), len(demands), critical,
    )

    return DashboardSummary(
        total_skus=len(skus),
        open_orders=status_counts[ProductionOrderStatus.OPEN.value],
        in_progress_orders=status_counts[ProductionOrderStatus.IN_PROGRESS.value],
        critical_demands=critical,
        status_counts=status_counts,
        monthly_production=series,
        window_months=window_months,
        generated_at=now,
    )
