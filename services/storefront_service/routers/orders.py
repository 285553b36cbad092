"""Order routes: checkout, order history, cancellation and admin status updates."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import get_current_user, get_optional_user, require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.routers._helpers import ok
from services.storefront_service.schemas import (
    ApiResponse,
    OrderCancelRequest,
    OrderCreate,
    OrderCreated,
    OrderResponse,
    OrderStatusUpdate,
)
from services.storefront_service.services.order_service import (
    cancel_order,
    create_order,
    get_order_for_user,
    get_orders_by_user,
    update_order_status,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["orders"])


# ============================================================================
# CUSTOMER ORDERS
# ============================================================================


@router.post(
    "/orders",
    response_model=ApiResponse[OrderCreated],
    status_code=status.HTTP_201_CREATED,
)
async def place_order(
    order_in: OrderCreate,
    current_user: Optional[AuthUser] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Place an order. Signed-in customers get it attached to their account."""
    user_id = current_user.user_id if current_user else None
    order, pricing = await create_order(db, order_in, user_id)
    return ok(
        OrderCreated(order=OrderResponse.model_validate(order), pricing=pricing),
        message="Order created successfully",
    )


@router.get("/orders", response_model=ApiResponse[list[OrderResponse]])
async def list_my_orders(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    orders = await get_orders_by_user(
        db, current_user.user_id, limit=limit, offset=offset
    )
    return ok([OrderResponse.model_validate(o) for o in orders])


@router.get("/orders/{order_id}", response_model=ApiResponse[OrderResponse])
async def get_my_order(
    order_id: uuid.UUID,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    order = await get_order_for_user(db, order_id, current_user.user_id)
    return ok(OrderResponse.model_validate(order))


@router.post("/orders/{order_id}/cancel", response_model=ApiResponse[OrderResponse])
async def cancel_my_order(
    order_id: uuid.UUID,
    payload: Optional[OrderCancelRequest] = None,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Cancel an order that has not started processing yet."""
    order = await get_order_for_user(db, order_id, current_user.user_id)
    reason = payload.reason if payload else None
    order = await cancel_order(db, order, reason)
    return ok(OrderResponse.model_validate(order), message="Order cancelled")


# ============================================================================
# ADMIN
# ============================================================================


@router.patch(
    "/admin/orders/{order_id}/status", response_model=ApiResponse[OrderResponse]
)
async def admin_update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    order = await update_order_status(
        db, order_id, payload.status, tracking_number=payload.tracking_number
    )
    return ok(OrderResponse.model_validate(order))
