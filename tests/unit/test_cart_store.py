"""Unit tests for the client-side cart store."""

import json
import uuid
from decimal import Decimal

import pytest
from services.storefront_service.state.cart import CartStore
from tests.factories import product_summary

CART_KEY = "ayurveda-cart-storage"


@pytest.fixture
def cart(storage):
    return CartStore(storage, CART_KEY)


# ---------------------------------------------------------------------------
# add_item
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_add_same_product_twice_merges_into_one_line(cart):
    """Two adds of P1 (1999) qty 1 give one line of 2 and a total of 3998."""
    p1 = product_summary(selling_price=Decimal("1999"))

    cart.add_item(p1, 1)
    cart.add_item(p1, 1)

    assert len(cart.items) == 1
    assert cart.items[0].quantity == 2
    assert cart.get_total_price() == Decimal("3998")


@pytest.mark.unit
def test_repeated_adds_sum_quantities(cart):
    product = product_summary()
    for quantity in (1, 3, 2, 5):
        cart.add_item(product, quantity)

    assert len(cart.items) == 1
    assert cart.items[0].quantity == 11


@pytest.mark.unit
def test_variants_of_same_product_are_separate_lines(cart):
    product = product_summary()
    small, large = uuid.uuid4(), uuid.uuid4()

    cart.add_item(product, 1, variant_id=small, variant_name="500g jar")
    cart.add_item(product, 2, variant_id=large, variant_name="1kg jar")
    cart.add_item(product, 1, variant_id=small)

    assert len(cart.items) == 2
    assert cart.find_item(product.id, small).quantity == 2
    assert cart.find_item(product.id, large).quantity == 2
    assert cart.find_item(product.id) is None
    assert cart.get_item_count(product.id) == 4


@pytest.mark.unit
def test_add_non_positive_quantity_is_ignored(cart):
    cart.add_item(product_summary(), 0)
    cart.add_item(product_summary(), -2)

    assert cart.items == ()


@pytest.mark.unit
def test_add_does_not_enforce_stock(cart):
    product = product_summary(stock_quantity=1)
    cart.add_item(product, 5)

    assert cart.items[0].quantity == 5


@pytest.mark.unit
def test_add_accepts_plain_product_dict(cart):
    product = product_summary()
    cart.add_item(product.model_dump(mode="json"), 1)

    assert cart.items[0].product.id == product.id


@pytest.mark.unit
def test_add_ignores_incomplete_product(cart, storage):
    cart.add_item({"name": "Triphala", "selling_price": "12.00"}, 1)

    assert cart.items == ()
    assert storage.get_item(CART_KEY) is None


# ---------------------------------------------------------------------------
# remove / update / clear
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_update_quantity_to_zero_empties_cart(cart):
    cart.add_item(product_summary(), 2)
    line_id = cart.items[0].id

    cart.update_quantity(line_id, 0)

    assert cart.items == ()
    assert cart.get_total_items() == 0


@pytest.mark.unit
@pytest.mark.parametrize("quantity", [0, -1, -50])
def test_update_quantity_non_positive_equals_remove(storage, quantity):
    a = CartStore(storage, "cart-a")
    b = CartStore(storage, "cart-b")
    for store in (a, b):
        store.add_item(product_summary(), 1)
        store.add_item(product_summary(), 3)

    a.update_quantity(a.items[0].id, quantity)
    b.remove_item(b.items[0].id)

    assert [i.quantity for i in a.items] == [i.quantity for i in b.items]


@pytest.mark.unit
def test_update_quantity_overwrites(cart):
    cart.add_item(product_summary(), 2)
    cart.update_quantity(cart.items[0].id, 7)

    assert cart.items[0].quantity == 7


@pytest.mark.unit
def test_remove_and_update_unknown_id_are_noops(cart):
    cart.add_item(product_summary(), 2)
    before = cart.items

    cart.remove_item("missing")
    cart.update_quantity("missing", 4)

    assert cart.items == before


@pytest.mark.unit
def test_clear_cart(cart):
    cart.add_item(product_summary(), 2)
    cart.add_item(product_summary(), 1)

    cart.clear_cart()

    assert cart.items == ()
    assert cart.get_total_price() == Decimal("0")


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_totals_follow_line_items(cart):
    cart.add_item(product_summary(selling_price=Decimal("10.50")), 2)
    cart.add_item(product_summary(selling_price=Decimal("3.25")), 4)

    assert cart.get_total_items() == 6
    assert cart.get_total_price() == Decimal("34.00")
    assert cart.get_total_items() == sum(i.quantity for i in cart.items)


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_visibility_flag_is_not_persisted(storage, cart):
    cart.add_item(product_summary(), 1)
    saved = storage.get_item(CART_KEY)

    cart.toggle_cart()
    assert cart.is_open is True
    cart.close_cart()
    assert cart.is_open is False
    cart.open_cart()

    assert storage.get_item(CART_KEY) == saved
    assert CartStore(storage, CART_KEY).is_open is False


# ---------------------------------------------------------------------------
# Persistence & notifications
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_reload_restores_items_in_order(storage, cart):
    first, second = product_summary(), product_summary()
    cart.add_item(first, 2, variant_name="500g jar")
    cart.add_item(second, 1)

    reloaded = CartStore(storage, CART_KEY)

    assert [i.product.id for i in reloaded.items] == [first.id, second.id]
    assert [i.id for i in reloaded.items] == [i.id for i in cart.items]
    assert reloaded.items[0].variant_name == "500g jar"
    assert reloaded.get_total_price() == cart.get_total_price()


@pytest.mark.unit
def test_every_mutation_replaces_persisted_record(storage, cart):
    cart.add_item(product_summary(), 1)
    cart.clear_cart()

    record = json.loads(storage.get_item(CART_KEY))
    assert record == {"state": {"items": []}, "version": 0}


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps([1, 2, 3]),
        json.dumps({"state": {"items": [{"quantity": 1}]}, "version": 0}),
        json.dumps({"state": {"items": 7}, "version": 0}),
        json.dumps({"state": {"items": []}, "version": 99}),
    ],
)
def test_malformed_saved_cart_loads_empty(storage, raw):
    storage.set_item(CART_KEY, raw)

    cart = CartStore(storage, CART_KEY)

    assert cart.items == ()
    cart.add_item(product_summary(), 1)
    assert cart.get_total_items() == 1


@pytest.mark.unit
def test_subscribers_see_each_change_until_unsubscribed(cart):
    snapshots = []
    unsubscribe = cart.subscribe(snapshots.append)

    cart.add_item(product_summary(), 1)
    cart.toggle_cart()
    unsubscribe()
    cart.clear_cart()

    assert len(snapshots) == 2
    assert snapshots[0].items[0].quantity == 1
    assert snapshots[1].is_open is True
