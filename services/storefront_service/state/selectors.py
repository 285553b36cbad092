"""Derived cart figures.

Pure functions over a sequence of cart lines so the store, the checkout
page and tests all compute totals the same way. Tax and shipping are added
at checkout, not here.
"""

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable

from pydantic import BaseModel

if TYPE_CHECKING:
    from services.storefront_service.state.cart import CartItem


class CartSummary(BaseModel):
    total_quantity: int
    line_count: int
    subtotal: Decimal


def total_items(items: Iterable["CartItem"]) -> int:
    """Sum of quantities, not the number of lines."""
    return sum(item.quantity for item in items)


def line_count(items: Iterable["CartItem"]) -> int:
    return sum(1 for _ in items)


def subtotal(items: Iterable["CartItem"]) -> Decimal:
    return sum((item.line_total for item in items), Decimal("0"))


def item_count(items: Iterable["CartItem"], product_id: uuid.UUID) -> int:
    """Units of one product across all of its variants."""
    return sum(item.quantity for item in items if item.product.id == product_id)


def summarize(items: Iterable["CartItem"]) -> CartSummary:
    items = list(items)
    return CartSummary(
        total_quantity=total_items(items),
        line_count=line_count(items),
        subtotal=subtotal(items),
    )
