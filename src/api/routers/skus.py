"""SKU catalog endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Path, Request, Response

from src.api.errors import ERROR_RESPONSES
from src.api.middleware.rate_limit import limiter
from src.models.catalog import BulkDeleteRequest, BulkDeleteResponse, Sku, SkuRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/skus", tags=["skus"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[Sku])
async def list_skus(request: Request):
    return await request.app.state.sku_service.list_skus()


@router.post("", response_model=Sku, status_code=201)
@limiter.limit("30/minute")
async def create_sku(request: Request, body: SkuRequest):
    return await request.app.state.sku_service.create_sku(body)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
@limiter.limit("10/minute")
async def delete_skus(request: Request, body: BulkDeleteRequest):
    """Delete several SKUs; SKUs still in use or missing are skipped and counted."""
    return await request.app.state.sku_service.delete_skus(body.ids)


@router.get("/{sku_id}", response_model=Sku)
async def get_sku(request: Request, sku_id: str = Path(..., min_length=1, max_length=64)):
    return await request.app.state.sku_service.get_sku(sku_id)


@router.put("/{sku_id}", response_model=Sku)
@limiter.limit("30/minute")
async def update_sku(
    request: Request,
    body: SkuRequest,
    sku_id: str = Path(..., min_length=1, max_length=64),
):
    return await request.app.state.sku_service.update_sku(sku_id, body)


@router.delete("/{sku_id}", status_code=204)
@limiter.limit("30/minute")
async def delete_sku(request: Request, sku_id: str = Path(..., min_length=1, max_length=64)):
    await request.app.state.sku_service.delete_sku(sku_id)
    return Response(status_code=204)
