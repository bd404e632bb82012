"""
Profile endpoints for API v1.

Anyone may read a profile.  Creating a profile and changing the bio
always act on the authenticated caller; there is no route that lets a
caller name another user for a write.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from blog_service.app.api.v1.dependencies import get_profile_service, http_error
from blog_service.app.core.exceptions import BlogServiceError
from blog_service.app.core.security import Caller, get_current_caller
from blog_service.app.schemas.user import BioUpdate, ProfileCreate, UserRead
from blog_service.app.services.profile_service import ProfileService


router = APIRouter()


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create the caller's profile",
)
async def create_profile(
    data: ProfileCreate,
    caller: Caller = Depends(get_current_caller),
    service: ProfileService = Depends(get_profile_service),
) -> UserRead:
    """Create a profile keyed by the caller's identity.

    Returns 409 if the caller already has a profile.
    """
    try:
        await service.create_profile(caller, data.username, data.bio)
    except BlogServiceError as e:
        raise http_error(e)
    return await service.get_profile(caller.principal)


@router.put(
    "/me/bio",
    response_model=UserRead,
    summary="Update the caller's bio",
)
async def update_bio(
    data: BioUpdate,
    caller: Caller = Depends(get_current_caller),
    service: ProfileService = Depends(get_profile_service),
) -> UserRead:
    """Replace the caller's bio; 404 if the caller has no profile yet."""
    try:
        await service.update_bio(caller, data.bio)
    except BlogServiceError as e:
        raise http_error(e)
    return await service.get_profile(caller.principal)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get a profile",
)
async def get_profile(
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> UserRead:
    profile = await service.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile
