"""Report calculators over SKUs, production orders and demands."""

from src.analytics.abc import compute_abc_classification
from src.analytics.dashboard import compute_dashboard_summary
from src.analytics.demand_progress import compute_demand_progress

__all__ = [
    "compute_abc_classification",
    "compute_dashboard_summary",
    "compute_demand_progress",
]
