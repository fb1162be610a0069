"""Performance (ABC) and dashboard endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query, Request

from src.api.errors import ERROR_RESPONSES
from src.api.middleware.rate_limit import limiter
from src.models.reports import DashboardSummary, PerformanceSkuData

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["reports"], responses=ERROR_RESPONSES)


@router.get("/performance", response_model=List[PerformanceSkuData])
@limiter.limit("60/minute")
async def get_performance(request: Request):
    """ABC classification of SKUs by all-time delivered units."""
    return await request.app.state.report_service.performance()


@router.get("/dashboard", response_model=DashboardSummary)
@limiter.limit("60/minute")
async def get_dashboard(
    request: Request,
    window_months: Optional[int] = Query(None, ge=1, le=24, description="Months in the production series"),
):
    """Order counters, critical demands and produced-vs-target per month."""
    return await request.app.state.report_service.dashboard(window_months=window_months)
