"""Shared test helpers: auth users, tokens and client-side storage."""

import uuid
from contextlib import contextmanager
from datetime import timedelta
from typing import Optional

import pytest
from jose import jwt

from libs.auth.dependencies import get_optional_user
from libs.auth.models import AuthUser
from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now
from libs.common.storage import MemoryStorage


def make_user(
    user_id: Optional[str] = None,
    email: str = "shopper@example.com",
    admin: bool = False,
) -> AuthUser:
    return AuthUser(
        user_id=user_id or f"user-{uuid.uuid4().hex[:8]}",
        email=email,
        app_metadata={"role": "admin"} if admin else {},
        user_metadata={"first_name": "Asha", "last_name": "Nair"},
    )


def make_token(user: AuthUser, expires_in: int = 3600) -> str:
    """Sign a Supabase-style access token for ``user``."""
    claims = {
        "sub": user.user_id,
        "email": user.email,
        "role": user.role,
        "aud": "authenticated",
        "app_metadata": user.app_metadata,
        "user_metadata": user.user_metadata,
        "exp": utc_now() + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, get_settings().SUPABASE_JWT_SECRET, algorithm="HS256")


def bearer(user: AuthUser) -> dict:
    return {"Authorization": f"Bearer {make_token(user)}"}


@contextmanager
def override_auth(app, user: Optional[AuthUser]):
    """Resolve the caller as ``user`` (or anonymous) without a token."""
    previous = app.dependency_overrides.get(get_optional_user)
    app.dependency_overrides[get_optional_user] = lambda: user
    try:
        yield user
    finally:
        if previous is None:
            app.dependency_overrides.pop(get_optional_user, None)
        else:
            app.dependency_overrides[get_optional_user] = previous


@pytest.fixture
def shopper() -> AuthUser:
    return make_user(user_id="user-123")


@pytest.fixture
def auth_headers(shopper) -> dict:
    return bearer(shopper)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()
