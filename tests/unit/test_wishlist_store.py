"""Unit tests for the client-side wishlist store."""

import json

import pytest
from services.storefront_service.state.wishlist import WishlistStore
from tests.factories import product_summary

WISHLIST_KEY = "ayurveda-wishlist"


@pytest.fixture
def wishlist(storage):
    return WishlistStore(storage, WISHLIST_KEY)


@pytest.mark.unit
def test_adding_twice_keeps_one_entry(wishlist):
    product = product_summary()

    wishlist.add_to_wishlist(product)
    wishlist.add_to_wishlist(product)

    assert wishlist.get_total_items() == 1
    assert wishlist.is_in_wishlist(product.id)


@pytest.mark.unit
def test_insertion_order_is_kept(wishlist):
    products = [product_summary() for _ in range(3)]
    for product in products:
        wishlist.add_to_wishlist(product)

    assert [p.id for p in wishlist.items] == [p.id for p in products]


@pytest.mark.unit
def test_remove_accepts_uuid_or_string(wishlist):
    a, b = product_summary(), product_summary()
    wishlist.add_to_wishlist(a)
    wishlist.add_to_wishlist(b)

    wishlist.remove_from_wishlist(str(a.id))
    wishlist.remove_from_wishlist(b.id)

    assert wishlist.items == ()


@pytest.mark.unit
def test_unknown_or_malformed_ids_are_ignored(wishlist):
    wishlist.add_to_wishlist(product_summary())

    wishlist.remove_from_wishlist("not-a-uuid")
    wishlist.remove_from_wishlist(product_summary().id)

    assert wishlist.get_total_items() == 1
    assert wishlist.is_in_wishlist("not-a-uuid") is False


@pytest.mark.unit
def test_clear_wishlist(storage, wishlist):
    wishlist.add_to_wishlist(product_summary())
    wishlist.clear_wishlist()

    assert wishlist.items == ()
    assert WishlistStore(storage, WISHLIST_KEY).items == ()


@pytest.mark.unit
def test_wishlist_survives_reload(storage, wishlist):
    product = product_summary(name="Brahmi Ghrita")
    wishlist.add_to_wishlist(product)

    reloaded = WishlistStore(storage, WISHLIST_KEY)

    assert reloaded.is_in_wishlist(product.id)
    assert reloaded.items[0].name == "Brahmi Ghrita"


@pytest.mark.unit
def test_duplicate_saved_entries_are_collapsed(storage):
    product = product_summary().model_dump(mode="json")
    storage.set_item(
        WISHLIST_KEY,
        json.dumps({"state": {"items": [product, product]}, "version": 0}),
    )

    assert WishlistStore(storage, WISHLIST_KEY).get_total_items() == 1


@pytest.mark.unit
def test_unreadable_saved_wishlist_loads_empty(storage):
    storage.set_item(WISHLIST_KEY, "]]")

    assert WishlistStore(storage, WISHLIST_KEY).items == ()


@pytest.mark.unit
def test_listeners_receive_items(wishlist):
    seen = []
    wishlist.subscribe(seen.append)
    product = product_summary()

    wishlist.add_to_wishlist(product)
    wishlist.add_to_wishlist(product)  # duplicate, no change
    wishlist.remove_from_wishlist(product.id)

    assert [len(items) for items in seen] == [1, 0]


@pytest.mark.unit
def test_add_ignores_incomplete_product(wishlist, storage):
    seen = []
    wishlist.subscribe(seen.append)

    wishlist.add_to_wishlist({"id": "not-a-uuid", "name": "Triphala"})

    assert wishlist.items == ()
    assert seen == []
    assert storage.get_item(WISHLIST_KEY) is None
