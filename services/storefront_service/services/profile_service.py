"""Customer profile reads and edits."""

from fastapi import HTTPException, status
from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from services.storefront_service.models import UserProfile
from services.storefront_service.schemas import ProfileUpdate
from services.storefront_service.services._helpers import backend_errors
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def get_profile(db: AsyncSession, user_id: str) -> UserProfile:
    with backend_errors("Failed to fetch profile"):
        profile = await db.get(UserProfile, user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    return profile


async def upsert_profile(
    db: AsyncSession, user: AuthUser, profile_in: ProfileUpdate
) -> UserProfile:
    """Apply the given fields, creating the profile on first edit.

    A new profile takes its email and names from the auth token claims.
    """
    with backend_errors("Failed to update profile"):
        profile = await db.get(UserProfile, user.user_id)
        if profile is None:
            metadata = user.user_metadata
            profile = UserProfile(
                id=user.user_id,
                email=user.email or "",
                first_name=metadata.get("first_name", ""),
                last_name=metadata.get("last_name", ""),
                email_verified=bool(user.email),
            )
            db.add(profile)
            logger.info("Creating profile for user %s", user.user_id)

        for field, value in profile_in.model_dump(exclude_unset=True).items():
            setattr(profile, field, value)

        await db.commit()
        await db.refresh(profile)
    return profile
