"""Profile routes for the signed-in customer."""

from fastapi import APIRouter, Depends
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.routers._helpers import ok
from services.storefront_service.schemas import (
    ApiResponse,
    ProfileResponse,
    ProfileUpdate,
)
from services.storefront_service.services.profile_service import (
    get_profile,
    upsert_profile,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/user/profile", tags=["profile"])


@router.get("", response_model=ApiResponse[ProfileResponse])
async def get_my_profile(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    profile = await get_profile(db, current_user.user_id)
    return ok(ProfileResponse.model_validate(profile))


@router.put("", response_model=ApiResponse[ProfileResponse])
async def update_my_profile(
    profile_in: ProfileUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    profile = await upsert_profile(db, current_user, profile_in)
    return ok(ProfileResponse.model_validate(profile), message="Profile updated")
