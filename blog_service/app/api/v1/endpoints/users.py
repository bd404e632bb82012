"""
Per-user listings for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends

from blog_service.app.api.v1.dependencies import get_post_service
from blog_service.app.schemas.post import PostRead
from blog_service.app.services.post_service import PostService


router = APIRouter()


@router.get(
    "/{user_id}/posts",
    response_model=List[PostRead],
    summary="List a user's posts",
)
async def list_user_posts(
    user_id: str,
    service: PostService = Depends(get_post_service),
) -> List[PostRead]:
    """Posts authored by ``user_id`` in creation order.

    Unknown users simply have no posts, so this never returns 404.
    """
    return await service.get_user_posts(user_id)
