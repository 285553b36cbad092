"""Integration tests for the server-side wishlist."""

import uuid

import pytest
import pytest_asyncio
from services.storefront_service.app.main import app
from tests.conftest import make_user, override_auth
from tests.factories import ProductFactory


@pytest_asyncio.fixture
async def product(db_session):
    product = ProductFactory.create(name="Ashwagandha Tablets")
    db_session.add(product)
    await db_session.commit()
    return product


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "method,kwargs",
    [
        ("get", {}),
        ("post", {"json": {"product_id": str(uuid.uuid4())}}),
        ("delete", {"params": {"product_id": str(uuid.uuid4())}}),
    ],
)
async def test_wishlist_requires_auth(client, method, kwargs):
    response = await getattr(client, method)("/api/wishlist", **kwargs)

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Authentication required"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_add_requires_product_id(client, auth_headers):
    response = await client.post("/api/wishlist", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Product ID is required"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_add_unknown_product(client, auth_headers):
    response = await client.post(
        "/api/wishlist", json={"product_id": str(uuid.uuid4())}, headers=auth_headers
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Product not found"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_add_then_list(client, product, auth_headers):
    """POST then GET /api/wishlist: the entry comes back with its product card."""
    added = await client.post(
        "/api/wishlist", json={"product_id": str(product.id)}, headers=auth_headers
    )

    assert added.status_code == 201, added.text
    body = added.json()
    assert body["message"] == "Product added to wishlist"
    assert body["data"]["product"]["name"] == "Ashwagandha Tablets"

    listed = await client.get("/api/wishlist", headers=auth_headers)
    entries = listed.json()["data"]
    assert [e["product_id"] for e in entries] == [str(product.id)]
    assert entries[0]["user_id"] == "user-123"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_duplicate_add_conflicts(client, product, auth_headers):
    payload = {"product_id": str(product.id)}
    await client.post("/api/wishlist", json=payload, headers=auth_headers)

    response = await client.post("/api/wishlist", json=payload, headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"] == "Product already in wishlist"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_wishlists_are_per_user(client, product, auth_headers):
    await client.post(
        "/api/wishlist", json={"product_id": str(product.id)}, headers=auth_headers
    )

    with override_auth(app, make_user(user_id="user-456")):
        response = await client.get("/api/wishlist")

    assert response.json()["data"] == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_remove_is_idempotent(client, product, auth_headers):
    await client.post(
        "/api/wishlist", json={"product_id": str(product.id)}, headers=auth_headers
    )

    first = await client.delete(
        "/api/wishlist", params={"product_id": str(product.id)}, headers=auth_headers
    )
    second = await client.delete(
        "/api/wishlist", params={"product_id": str(product.id)}, headers=auth_headers
    )

    assert first.status_code == 200
    assert first.json() == {
        "success": True,
        "data": None,
        "error": None,
        "message": "Product removed from wishlist",
    }
    assert second.status_code == 200
    listed = await client.get("/api/wishlist", headers=auth_headers)
    assert listed.json()["data"] == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_remove_requires_product_id(client, auth_headers):
    response = await client.delete("/api/wishlist", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Product ID is required"
