"""Order API: thin routes delegating to FirestoreOrderService."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from byki_admin.api.v1.dependencies import get_order_service, require_found
from byki_admin.application.dtos import OrderStats
from byki_admin.core.limiter import limit_writes
from byki_admin.domain.entities import Order
from byki_admin.domain.enums import OrderStatus
from byki_admin.infrastructure.firebase.services import FirestoreOrderService
from byki_admin.schemas.orders import OrderStatusUpdate, OrderUpdate
from byki_admin.shared.utils.datetime import ensure_utc

router = APIRouter()

OrderServiceDep = Annotated[FirestoreOrderService, Depends(get_order_service)]


@router.get("", response_model=list[Order])
async def list_orders(
    order_svc: OrderServiceDep,
    status: OrderStatus | None = None,
    user_id: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    limit: int | None = Query(default=None, ge=1, le=1000),
):
    """Newest first, optionally filtered by status, user and creation date."""
    return await order_svc.get_orders(
        status=status,
        user_id=user_id,
        start_date=ensure_utc(start_date),
        end_date=ensure_utc(end_date),
        limit=limit,
    )


@router.get("/stats", response_model=OrderStats)
async def order_stats(order_svc: OrderServiceDep, date: datetime | None = None):
    """Counts and revenue for one business day (default today)."""
    return await order_svc.get_order_stats(ensure_utc(date))


@router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str, order_svc: OrderServiceDep):
    return require_found(await order_svc.get_order(order_id), "order", order_id)


@router.patch("/{order_id}/status", response_model=Order)
@limit_writes
async def update_order_status(
    request: Request,
    order_id: str,
    body: OrderStatusUpdate,
    order_svc: OrderServiceDep,
):
    require_found(await order_svc.get_order(order_id), "order", order_id)
    await order_svc.update_order_status(order_id, body.status)
    return await order_svc.get_order(order_id)


@router.patch("/{order_id}", response_model=Order)
@limit_writes
async def update_order(
    request: Request,
    order_id: str,
    body: OrderUpdate,
    order_svc: OrderServiceDep,
):
    require_found(await order_svc.get_order(order_id), "order", order_id)
    await order_svc.update_order(order_id, body.to_document())
    return await order_svc.get_order(order_id)
