"""Production order endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Path, Request, Response

from src.api.errors import ERROR_RESPONSES
from src.api.middleware.rate_limit import limiter
from src.models.catalog import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    CompleteOrderRequest,
    ProductionOrder,
    ProductionOrderRequest,
    ProductionOrderWithSku,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/production-orders", tags=["production-orders"], responses=ERROR_RESPONSES
)


@router.get("", response_model=List[ProductionOrderWithSku])
async def list_orders(request: Request):
    return await request.app.state.production_order_service.list_orders()


@router.post("", response_model=ProductionOrder, status_code=201)
@limiter.limit("30/minute")
async def create_order(request: Request, body: ProductionOrderRequest):
    return await request.app.state.production_order_service.create_order(body)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
@limiter.limit("10/minute")
async def delete_orders(request: Request, body: BulkDeleteRequest):
    """Delete several orders; in-progress or missing orders are skipped and counted."""
    return await request.app.state.production_order_service.delete_orders(body.ids)


@router.get("/{order_id}", response_model=ProductionOrderWithSku)
async def get_order(request: Request, order_id: str = Path(..., min_length=1, max_length=64)):
    return await request.app.state.production_order_service.get_order(order_id)


@router.put("/{order_id}", response_model=ProductionOrder)
@limiter.limit("30/minute")
async def update_order(
    request: Request,
    body: ProductionOrderRequest,
    order_id: str = Path(..., min_length=1, max_length=64),
):
    """Update an order. SKU and quantity only change while the order is open."""
    return await request.app.state.production_order_service.update_order(order_id, body)


@router.post("/{order_id}/start", response_model=ProductionOrder)
@limiter.limit("30/minute")
async def start_order(request: Request, order_id: str = Path(..., min_length=1, max_length=64)):
    return await request.app.state.production_order_service.start_order(order_id)


@router.post("/{order_id}/complete", response_model=ProductionOrder)
@limiter.limit("30/minute")
async def complete_order(
    request: Request,
    body: CompleteOrderRequest,
    order_id: str = Path(..., min_length=1, max_length=64),
):
    return await request.app.state.production_order_service.complete_order(
        order_id, body.delivered_quantity
    )


@router.post("/{order_id}/cancel", response_model=ProductionOrder)
@limiter.limit("30/minute")
async def cancel_order(request: Request, order_id: str = Path(..., min_length=1, max_length=64)):
    return await request.app.state.production_order_service.cancel_order(order_id)


@router.delete("/{order_id}", status_code=204)
@limiter.limit("30/minute")
async def delete_order(request: Request, order_id: str = Path(..., min_length=1, max_length=64)):
    await request.app.state.production_order_service.delete_order(order_id)
    return Response(status_code=204)
