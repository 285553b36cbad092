"""Integration tests for checkout, order history and order administration."""

import uuid
from decimal import Decimal

import pytest
import pytest_asyncio
from services.storefront_service.models import OrderStatus
from tests.conftest import bearer, make_token, make_user
from tests.factories import OrderFactory, ProductFactory, address_payload


@pytest_asyncio.fixture
async def product(db_session):
    product = ProductFactory.create(selling_price=Decimal("19.99"), stock_quantity=5)
    db_session.add(product)
    await db_session.commit()
    return product


def order_payload(*items, **overrides) -> dict:
    payload = {
        "items": list(items),
        "shipping_address": address_payload(),
        "payment_method": "cod",
    }
    payload.update(overrides)
    return payload


async def _place(client, product, headers=None, quantity=1):
    response = await client.post(
        "/api/orders",
        json=order_payload({"product_id": str(product.id), "quantity": quantity}),
        headers=headers or {},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["order"]


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_guest_checkout(client, product):
    """POST /api/orders: guests can order; pricing comes from the catalog."""
    response = await client.post(
        "/api/orders",
        json=order_payload(
            {"product_id": str(product.id), "quantity": 2}, coupon_code="WELCOME10"
        ),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Order created successfully"
    order = body["data"]["order"]
    pricing = body["data"]["pricing"]
    assert order["user_id"] is None
    assert order["status"] == "pending"
    assert order["order_number"].startswith("AYU-")
    assert Decimal(pricing["subtotal"]) == Decimal("39.98")
    assert Decimal(pricing["discount_amount"]) == Decimal("4.00")
    assert Decimal(order["total_amount"]) == Decimal(pricing["total_amount"])
    assert order["items"][0]["product_sku"] == product.sku
    assert order["billing_address"] == order["shipping_address"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_signed_in_checkout_attaches_user(client, product, auth_headers):
    order = await _place(client, product, headers=auth_headers)

    assert order["user_id"] == "user-123"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_checkout_with_invalid_token_is_rejected(client, product):
    response = await client.post(
        "/api/orders",
        json=order_payload({"product_id": str(product.id), "quantity": 1}),
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Could not validate credentials"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_checkout_with_expired_token_is_rejected(client, product, shopper):
    response = await client.post(
        "/api/orders",
        json=order_payload({"product_id": str(product.id), "quantity": 1}),
        headers={"Authorization": f"Bearer {make_token(shopper, expires_in=-60)}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_checkout_rejects_empty_cart(client):
    response = await client.post("/api/orders", json=order_payload())

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": "Order must contain at least one item",
    }


@pytest.mark.asyncio
@pytest.mark.integration
async def test_checkout_insufficient_stock(client, product):
    response = await client.post(
        "/api/orders",
        json=order_payload({"product_id": str(product.id), "quantity": 6}),
    )

    assert response.status_code == 400
    assert response.json()["error"] == (
        f"Insufficient stock for product: {product.name}"
    )


@pytest.mark.asyncio
@pytest.mark.integration
async def test_checkout_unknown_product(client):
    missing = uuid.uuid4()
    response = await client.post(
        "/api/orders",
        json=order_payload({"product_id": str(missing), "quantity": 1}),
    )

    assert response.status_code == 404
    assert response.json()["error"] == f"Product not found: {missing}"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_checkout_validates_address(client, product):
    response = await client.post(
        "/api/orders",
        json=order_payload(
            {"product_id": str(product.id), "quantity": 1},
            shipping_address=address_payload(email="not-an-email"),
        ),
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith("shipping_address.email")


# ---------------------------------------------------------------------------
# Order history
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_history_requires_auth(client):
    response = await client.get("/api/orders")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Authentication required"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_history_lists_only_own_orders(
    client, db_session, product, auth_headers
):
    mine = await _place(client, product, headers=auth_headers)
    await _place(client, product)
    db_session.add(OrderFactory.create(user_id="someone-else"))
    await db_session.commit()

    response = await client.get("/api/orders", headers=auth_headers)

    assert response.status_code == 200
    assert [o["id"] for o in response.json()["data"]] == [mine["id"]]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_get_order_hides_other_users_orders(
    client, db_session, product, auth_headers
):
    theirs = OrderFactory.create(user_id="someone-else")
    db_session.add(theirs)
    await db_session.commit()
    mine = await _place(client, product, headers=auth_headers)

    own = await client.get(f"/api/orders/{mine['id']}", headers=auth_headers)
    other = await client.get(f"/api/orders/{theirs.id}", headers=auth_headers)

    assert own.status_code == 200
    assert own.json()["data"]["order_number"] == mine["order_number"]
    assert other.status_code == 404
    assert other.json()["error"] == "Order not found"


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_cancel_pending_order(client, product, auth_headers):
    order = await _place(client, product, headers=auth_headers)

    response = await client.post(
        f"/api/orders/{order['id']}/cancel",
        json={"reason": "Changed my mind"},
        headers=auth_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["message"] == "Order cancelled"
    assert body["data"]["status"] == "cancelled"
    assert body["data"]["notes"] == "Cancelled: Changed my mind"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_cancel_without_body(client, product, auth_headers):
    order = await _place(client, product, headers=auth_headers)

    response = await client.post(
        f"/api/orders/{order['id']}/cancel", headers=auth_headers
    )

    assert response.status_code == 200, response.text
    assert response.json()["data"]["notes"] == "Order cancelled"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_cannot_cancel_shipped_order(client, db_session, auth_headers):
    order = OrderFactory.create(user_id="user-123", status=OrderStatus.SHIPPED)
    db_session.add(order)
    await db_session.commit()

    response = await client.post(f"/api/orders/{order.id}/cancel", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Order cannot be cancelled in current status"


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_updates_status(client, product):
    order = await _place(client, product)
    admin_headers = bearer(make_user(admin=True))

    response = await client.patch(
        f"/api/admin/orders/{order['id']}/status",
        json={"status": "shipped", "tracking_number": "TRK-1"},
        headers=admin_headers,
    )

    assert response.status_code == 200, response.text
    data = response.json()["data"]
    assert data["status"] == "shipped"
    assert data["tracking_number"] == "TRK-1"
    assert data["shipped_at"] is not None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_status_update_requires_admin(client, product, auth_headers):
    order = await _place(client, product)

    response = await client.patch(
        f"/api/admin/orders/{order['id']}/status",
        json={"status": "confirmed"},
        headers=auth_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.integration
async def test_status_update_unknown_order(client):
    response = await client.patch(
        f"/api/admin/orders/{uuid.uuid4()}/status",
        json={"status": "confirmed"},
        headers=bearer(make_user(admin=True)),
    )

    assert response.status_code == 404
