"""Order placement and lifecycle.

Pricing always comes from the live catalog: product (or active variant)
price, SKU and stock. Snapshot fields a client sends on a line are ignored.
The priced snapshot is what gets stored on the order lines.
"""

import random
import string
import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from fastapi import HTTPException, status
from libs.common.config import get_settings
from libs.common.datetime_utils import epoch_millis, utc_now
from libs.common.logging import get_logger
from services.storefront_service.models import (
    CANCELLABLE_ORDER_STATUSES,
    Order,
    OrderItem,
    OrderStatus,
    Product,
    ProductVariant,
)
from services.storefront_service.schemas import (
    OrderCreate,
    OrderPricing,
    PricedOrderItem,
)
from services.storefront_service.services._helpers import backend_errors
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

CENTS = Decimal("0.01")

# Coupon table until coupons move into the database.
# Values below 1 are a fraction of the subtotal, otherwise a flat amount.
COUPONS: dict[str, Decimal] = {
    "WELCOME10": Decimal("0.10"),
    "SAVE20": Decimal("0.20"),
    "FLAT50": Decimal("5"),
}

# Timestamp column stamped when an order enters each status
STATUS_TIMESTAMPS = {
    OrderStatus.CONFIRMED: "confirmed_at",
    OrderStatus.SHIPPED: "shipped_at",
    OrderStatus.DELIVERED: "delivered_at",
}


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def generate_order_number() -> str:
    """e.g. AYU-1718000000000-K3J9QZ"""
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=6))
    return f"{get_settings().ORDER_NUMBER_PREFIX}-{epoch_millis()}-{suffix}"


def calculate_coupon_discount(coupon_code: Optional[str], subtotal: Decimal) -> Decimal:
    """Discount for a coupon; unknown codes give nothing."""
    if not coupon_code:
        return Decimal("0")
    rate = COUPONS.get(coupon_code.strip().upper())
    if rate is None:
        return Decimal("0")
    if rate < 1:
        return _money(subtotal * rate)
    return min(rate, subtotal)


def calculate_shipping(subtotal: Decimal) -> Decimal:
    settings = get_settings()
    if subtotal >= settings.FREE_SHIPPING_THRESHOLD:
        return Decimal("0")
    return settings.FLAT_SHIPPING_FEE


async def calculate_order_pricing(
    db: AsyncSession, order_in: OrderCreate
) -> OrderPricing:
    """Price every line, then apply tax, shipping and coupon."""
    subtotal = Decimal("0")
    priced_items: list[PricedOrderItem] = []

    for item in order_in.items:
        product = await db.get(Product, item.product_id)
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Product not found: {item.product_id}",
            )

        unit_price = product.selling_price
        product_sku = product.sku
        stock_quantity = product.stock_quantity
        if item.variant_id is not None:
            variant = await db.get(ProductVariant, item.variant_id)
            if (
                variant is None
                or variant.product_id != product.id
                or not variant.is_active
            ):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Product variant not found: {item.variant_id}",
                )
            unit_price = variant.price
            product_sku = variant.sku
            stock_quantity = variant.stock_quantity

        if product.track_inventory and stock_quantity < item.quantity:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Insufficient stock for product: {product.name}",
            )

        line_total = _money(unit_price * item.quantity)
        subtotal += line_total
        priced_items.append(
            PricedOrderItem(
                product_id=item.product_id,
                variant_id=item.variant_id,
                product_name=product.name,
                product_sku=product_sku,
                quantity=item.quantity,
                unit_price=unit_price,
                total_price=line_total,
            )
        )

    tax_amount = _money(subtotal * get_settings().TAX_RATE)
    shipping_amount = calculate_shipping(subtotal)
    discount_amount = calculate_coupon_discount(order_in.coupon_code, subtotal)
    total_amount = subtotal + tax_amount + shipping_amount - discount_amount

    return OrderPricing(
        subtotal=subtotal,
        tax_amount=tax_amount,
        shipping_amount=shipping_amount,
        discount_amount=discount_amount,
        total_amount=max(total_amount, Decimal("0")),
        order_items=priced_items,
    )


async def create_order(
    db: AsyncSession, order_in: OrderCreate, user_id: Optional[str] = None
) -> tuple[Order, OrderPricing]:
    """Create a pending order with snapshot lines. Guests pass no user_id."""
    if not order_in.items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order must contain at least one item",
        )

    with backend_errors("Failed to create order"):
        pricing = await calculate_order_pricing(db, order_in)

        shipping_address = order_in.shipping_address.model_dump()
        billing_address = (
            order_in.billing_address.model_dump()
            if order_in.billing_address
            else shipping_address
        )
        order = Order(
            order_number=generate_order_number(),
            user_id=user_id,
            subtotal=pricing.subtotal,
            tax_amount=pricing.tax_amount,
            shipping_amount=pricing.shipping_amount,
            discount_amount=pricing.discount_amount,
            total_amount=pricing.total_amount,
            currency=get_settings().STORE_CURRENCY,
            exchange_rate=Decimal("1"),
            coupon_code=order_in.coupon_code,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=order_in.payment_method,
            notes=order_in.notes,
            customer_notes=order_in.customer_notes,
            ordered_at=utc_now(),
            items=[
                OrderItem(
                    product_id=line.product_id,
                    variant_id=line.variant_id,
                    product_name=line.product_name,
                    product_sku=line.product_sku,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    total_price=line.total_price,
                )
                for line in pricing.order_items
            ],
        )
        db.add(order)
        await db.commit()

        order = await _load_order(db, order.id)

    logger.info(
        "Created order %s (user=%s, total=%s)",
        order.order_number,
        user_id or "guest",
        order.total_amount,
    )
    return order, pricing


async def _load_order(db: AsyncSession, order_id: uuid.UUID) -> Optional[Order]:
    query = (
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items))
        .execution_options(populate_existing=True)
    )
    return (await db.execute(query)).scalar_one_or_none()


async def get_orders_by_user(
    db: AsyncSession, user_id: str, *, limit: int = 10, offset: int = 0
) -> list[Order]:
    """Most recent orders first."""
    with backend_errors("Failed to fetch orders"):
        query = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc())
            .options(selectinload(Order.items))
            .offset(offset)
            .limit(limit)
        )
        return list((await db.execute(query)).scalars().all())


async def get_order_by_id(db: AsyncSession, order_id: uuid.UUID) -> Optional[Order]:
    with backend_errors("Failed to fetch order"):
        return await _load_order(db, order_id)


async def get_order_for_user(
    db: AsyncSession, order_id: uuid.UUID, user_id: str
) -> Order:
    """Order owned by ``user_id``; other users' orders read as not found."""
    order = await get_order_by_id(db, order_id)
    if order is None or order.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
        )
    return order


async def update_order_status(
    db: AsyncSession,
    order_id: uuid.UUID,
    new_status: OrderStatus,
    *,
    tracking_number: Optional[str] = None,
) -> Order:
    """Move an order to ``new_status`` and stamp the matching timestamp."""
    with backend_errors("Failed to update order status"):
        order = await _load_order(db, order_id)
        if order is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
            )

        order.status = new_status
        stamp = STATUS_TIMESTAMPS.get(new_status)
        if stamp:
            setattr(order, stamp, utc_now())
        if tracking_number:
            order.tracking_number = tracking_number

        await db.commit()
        order = await _load_order(db, order_id)

    logger.info("Order %s moved to %s", order.order_number, new_status.value)
    return order


async def cancel_order(
    db: AsyncSession, order: Order, reason: Optional[str] = None
) -> Order:
    """Cancel a pending or confirmed order."""
    if order.status not in CANCELLABLE_ORDER_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Order cannot be cancelled in current status",
        )

    with backend_errors("Failed to cancel order"):
        order.status = OrderStatus.CANCELLED
        order.notes = f"Cancelled: {reason}" if reason else "Order cancelled"
        await db.commit()
        order = await _load_order(db, order.id)

    logger.info("Order %s cancelled", order.order_number)
    return order
