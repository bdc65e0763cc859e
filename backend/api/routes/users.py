"""
User-related endpoints.

Provides the caller's identity together with their application profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr

from shared.models import AuthenticatedUser
from modules.auth.exceptions import ProfileLoadError
from modules.auth.interfaces import IAuthService
from modules.auth.models import UserProfile, derive_role_flags

from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """User profile response model."""

    id: str
    email: EmailStr
    email_verified: bool
    profile: Optional[UserProfile] = None
    is_admin: bool = False
    is_tech: bool = False


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfileResponse:
    """
    Get the current user's profile and role flags.

    A user without a profile row gets both flags false.
    """
    try:
        profile = await auth.get_profile(user.id)
    except ProfileLoadError:
        raise HTTPException(status_code=503, detail="User profile is temporarily unavailable")

    flags = derive_role_flags(profile, loading=False)
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        email_verified=user.email_verified,
        profile=profile,
        is_admin=flags.is_admin,
        is_tech=flags.is_tech,
    )
