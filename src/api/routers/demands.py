"""Demand planning endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Path, Request, Response

from src.api.errors import ERROR_RESPONSES
from src.api.middleware.rate_limit import limiter
from src.models.catalog import BulkDeleteRequest, BulkDeleteResponse, Demand, DemandRequest
from src.models.reports import DemandWithProgress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/demands", tags=["demands"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[DemandWithProgress])
async def list_demands(request: Request):
    """All demands with produced quantity and progress, newest month first."""
    return await request.app.state.report_service.demand_progress()


@router.post("", response_model=Demand, status_code=201)
@limiter.limit("30/minute")
async def create_demand(request: Request, body: DemandRequest):
    return await request.app.state.demand_service.create_demand(body)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
@limiter.limit("10/minute")
async def delete_demands(request: Request, body: BulkDeleteRequest):
    return await request.app.state.demand_service.delete_demands(body.ids)


@router.get("/{demand_id}", response_model=Demand)
async def get_demand(request: Request, demand_id: str = Path(..., min_length=1, max_length=64)):
    return await request.app.state.demand_service.get_demand(demand_id)


@router.put("/{demand_id}", response_model=Demand)
@limiter.limit("30/minute")
async def update_demand(
    request: Request,
    body: DemandRequest,
    demand_id: str = Path(..., min_length=1, max_length=64),
):
    return await request.app.state.demand_service.update_demand(demand_id, body)


@router.delete("/{demand_id}", status_code=204)
@limiter.limit("30/minute")
async def delete_demand(request: Request, demand_id: str = Path(..., min_length=1, max_length=64)):
    await request.app.state.demand_service.delete_demand(demand_id)
    return Response(status_code=204)
