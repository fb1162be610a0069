"""Production order service and status state machine.

    open ──start──> in_progress ──complete──> completed
      │                  │
      └────cancel────────┴──────cancel──────> cancelled
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable

from src.analytics.lookups import build_sku_code_map, sku_label
from src.exceptions import InvalidTransitionError, OrderLockedError, RecordNotFoundError
from src.models.catalog import (
    BulkDeleteResponse,
    ProductionOrder,
    ProductionOrderRequest,
    ProductionOrderStatus,
    ProductionOrderWithSku,
    utcnow,
)
from src.repositories.base import ProductionOrderRepository, SkuRepository
from src.services.skus import new_id

logger = logging.getLogger(__name__)

Status = ProductionOrderStatus

ALLOWED_TRANSITIONS: dict[ProductionOrderStatus, frozenset[ProductionOrderStatus]] = {
    Status.OPEN: frozenset({Status.IN_PROGRESS, Status.CANCELLED}),
    Status.IN_PROGRESS: frozenset({Status.COMPLETED, Status.CANCELLED}),
    Status.COMPLETED: frozenset(),
    Status.CANCELLED: frozenset(),
}


def can_transition(current: ProductionOrderStatus, target: ProductionOrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def elapsed_ms(start: datetime | None, end: datetime) -> int | None:
    if start is None:
        return None
    return int((end - start).total_seconds() * 1000)


def seconds_per_unit(total_ms: int | None, delivered: int) -> float | None:
    if total_ms is None or total_ms <= 0 or delivered <= 0:
        return None
    return total_ms / 1000 / delivered


class ProductionOrderService:
    """Create, edit and move production orders through their lifecycle.

    SKU and quantity are editable only while the order is open; notes stay
    editable after closing. In-progress orders cannot be deleted.
    """

    def __init__(
        self,
        production_orders: ProductionOrderRepository,
        skus: SkuRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.production_orders = production_orders
        self.skus = skus
        self._clock = clock

    async def list_orders(self) -> list[ProductionOrderWithSku]:
        orders, skus = await asyncio.gather(self.production_orders.list(), self.skus.list())
        codes = build_sku_code_map(skus)
        return [
            ProductionOrderWithSku(**order.model_dump(), sku_code=sku_label(order.sku_id, codes))
            for order in orders
        ]

    async def get_order(self, order_id: str) -> ProductionOrderWithSku:
        order = await self._get(order_id)
        sku = await self.skus.get(order.sku_id)
        codes = build_sku_code_map([sku] if sku else [])
        return ProductionOrderWithSku(**order.model_dump(), sku_code=sku_label(order.sku_id, codes))

    async def create_order(self, request: ProductionOrderRequest) -> ProductionOrder:
        await self._ensure_sku_exists(request.sku_id)
        now = self._clock()
        order = ProductionOrder(
            id=new_id("po"),
            sku_id=request.sku_id,
            quantity=request.quantity,
            notes=request.notes,
            status=Status.OPEN,
            created_at=now,
            updated_at=now,
        )
        await self.production_orders.put(order)
        logger.info("Created production order %s for SKU %s (qty=%d)", order.id, order.sku_id, order.quantity)
        return order

    async def update_order(self, order_id: str, request: ProductionOrderRequest) -> ProductionOrder:
        order = await self._get(order_id)
        changes: dict = {"notes": request.notes, "updated_at": self._clock()}

        if order.status == Status.OPEN:
            if request.sku_id != order.sku_id:
                await self._ensure_sku_exists(request.sku_id)
            changes.update(sku_id=request.sku_id, quantity=request.quantity)
        elif request.sku_id != order.sku_id or request.quantity != order.quantity:
            logger.warning("Rejected SKU/quantity change on %s order %s", order.status.value, order_id)
            raise OrderLockedError(
                f"SKU and quantity can only change while the order is open (status: {order.status.value})"
            )

        updated = order.model_copy(update=changes)
        await self.production_orders.put(updated)
        logger.info("Updated production order %s", order_id)
        return updated

    async def start_order(self, order_id: str) -> ProductionOrder:
        order = await self._get(order_id)
        self._check_transition(order, Status.IN_PROGRESS)
        now = self._clock()
        started = order.model_copy(
            update={"status": Status.IN_PROGRESS, "start_time": now, "updated_at": now}
        )
        await self.production_orders.put(started)
        logger.info("Started production order %s", order_id)
        return started

    async def complete_order(self, order_id: str, delivered_quantity: int) -> ProductionOrder:
        if delivered_quantity < 0:
            raise ValueError(f"delivered_quantity must be >= 0, got {delivered_quantity}")
        order = await self._get(order_id)
        self._check_transition(order, Status.COMPLETED)
        now = self._clock()
        total_ms = elapsed_ms(order.start_time, now)
        completed = order.model_copy(
            update={
                "status": Status.COMPLETED,
                "end_time": now,
                "delivered_quantity": delivered_quantity,
                "total_production_time_ms": total_ms,
                "seconds_per_unit": seconds_per_unit(total_ms, delivered_quantity),
                "updated_at": now,
            }
        )
        await self.production_orders.put(completed)
        logger.info("Completed production order %s with %d units delivered", order_id, delivered_quantity)
        return completed

    async def cancel_order(self, order_id: str) -> ProductionOrder:
        order = await self._get(order_id)
        self._check_transition(order, Status.CANCELLED)
        now = self._clock()
        cancelled = order.model_copy(
            update={
                "status": Status.CANCELLED,
                "end_time": now,
                "total_production_time_ms": elapsed_ms(order.start_time, now),
                "updated_at": now,
            }
        )
        await self.production_orders.put(cancelled)
        logger.info("Cancelled production order %s", order_id)
        return cancelled

    async def delete_order(self, order_id: str) -> None:
        order = await self._get(order_id)
        if order.status == Status.IN_PROGRESS:
            raise OrderLockedError(f"Production order {order_id} is in progress and cannot be deleted")
        await self.production_orders.delete(order_id)
        logger.info("Deleted production order %s", order_id)

    async def delete_orders(self, order_ids: list[str]) -> BulkDeleteResponse:
        result = BulkDeleteResponse()
        deletable: list[str] = []
        for order_id in dict.fromkeys(order_ids):
            order = await self.production_orders.get(order_id)
            if order is None:
                result.not_found += 1
            elif order.status == Status.IN_PROGRESS:
                result.in_progress += 1
            else:
                deletable.append(order_id)
        result.deleted = await self.production_orders.delete_many(deletable)
        log = logger.warning if result.has_skipped else logger.info
        log(
            "Bulk order delete: %d deleted, %d in progress, %d not found",
            result.deleted, result.in_progress, result.not_found,
        )
        return result

    async def _get(self, order_id: str) -> ProductionOrder:
        order = await self.production_orders.get(order_id)
        if order is None:
            raise RecordNotFoundError("Production order", order_id)
        return order

    async def _ensure_sku_exists(self, sku_id: str) -> None:
        if await self.skus.get(sku_id) is None:
            raise RecordNotFoundError("SKU", sku_id)

    @staticmethod
    def _check_transition(order: ProductionOrder, target: ProductionOrderStatus) -> None:
        if not can_transition(order.status, target):
            logger.warning(
                "Rejected transition %s -> %s for order %s",
                order.status.value, target.value, order.id,
            )
            raise InvalidTransitionError(
                f"Cannot move production order from {order.status.value} to {target.value}"
            )
