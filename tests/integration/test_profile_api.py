"""Integration tests for the customer profile endpoints."""

import pytest
from tests.factories import UserProfileFactory


@pytest.mark.asyncio
@pytest.mark.integration
async def test_profile_requires_auth(client):
    response = await client.get("/api/user/profile")

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.integration
async def test_missing_profile_is_404(client, auth_headers):
    response = await client.get("/api/user/profile", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Profile not found"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_first_update_creates_profile_from_token(client, auth_headers):
    """PUT /api/user/profile: email and names default to the token claims."""
    response = await client.put(
        "/api/user/profile", json={"phone": "+91 98470 11111"}, headers=auth_headers
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["message"] == "Profile updated"
    profile = body["data"]
    assert profile["id"] == "user-123"
    assert profile["email"] == "shopper@example.com"
    assert profile["first_name"] == "Asha"
    assert profile["last_name"] == "Nair"
    assert profile["phone"] == "+91 98470 11111"

    fetched = await client.get("/api/user/profile", headers=auth_headers)
    assert fetched.json()["data"]["phone"] == "+91 98470 11111"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_changes_only_given_fields(client, db_session, auth_headers):
    db_session.add(
        UserProfileFactory.create(id="user-123", first_name="Meera", phone="123")
    )
    await db_session.commit()

    response = await client.put(
        "/api/user/profile",
        json={"first_name": "Meenakshi", "gender": "female"},
        headers=auth_headers,
    )

    profile = response.json()["data"]
    assert profile["first_name"] == "Meenakshi"
    assert profile["gender"] == "female"
    assert profile["phone"] == "123"


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "payload,fragment",
    [
        ({}, "No profile fields provided"),
        ({"email": "new@example.com"}, "email"),
        ({"gender": "unknown"}, "gender"),
    ],
)
async def test_invalid_profile_updates(client, auth_headers, payload, fragment):
    response = await client.put(
        "/api/user/profile", json=payload, headers=auth_headers
    )

    assert response.status_code == 400
    assert fragment in response.json()["error"]
