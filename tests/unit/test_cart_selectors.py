"""Unit tests for derived cart figures."""

import uuid
from decimal import Decimal

import pytest
from services.storefront_service.state.cart import CartItem
from services.storefront_service.state.selectors import (
    item_count,
    line_count,
    subtotal,
    summarize,
    total_items,
)
from tests.factories import product_summary


def _line(quantity, price="1999", product=None, variant_id=None):
    product = product or product_summary(selling_price=Decimal(price))
    return CartItem(product=product, quantity=quantity, variant_id=variant_id)


@pytest.mark.unit
def test_empty_cart_figures():
    assert total_items([]) == 0
    assert line_count([]) == 0
    assert subtotal([]) == Decimal("0")


@pytest.mark.unit
def test_total_items_counts_units_not_lines():
    items = [_line(2), _line(3)]

    assert total_items(items) == 5
    assert line_count(items) == 2


@pytest.mark.unit
def test_subtotal_uses_selling_price():
    items = [_line(2, "1999"), _line(1, "0.01")]

    assert subtotal(items) == Decimal("3998.01")


@pytest.mark.unit
def test_item_count_spans_variants():
    product = product_summary()
    items = [
        _line(1, product=product, variant_id=uuid.uuid4()),
        _line(4, product=product, variant_id=uuid.uuid4()),
        _line(7),
    ]

    assert item_count(items, product.id) == 5
    assert item_count(items, uuid.uuid4()) == 0


@pytest.mark.unit
def test_summarize_accepts_generators():
    summary = summarize(_line(q, "10") for q in (1, 2))

    assert summary.total_quantity == 3
    assert summary.line_count == 2
    assert summary.subtotal == Decimal("30")
