"""
Post endpoints for API v1.

Publishing requires an authenticated caller, who becomes the author.
Listings are public and returned in creation order.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from blog_service.app.api.v1.dependencies import get_post_service, http_error
from blog_service.app.core.exceptions import BlogServiceError
from blog_service.app.core.security import Caller, get_current_caller
from blog_service.app.schemas.post import PostCreate, PostCreated, PostRead
from blog_service.app.services.post_service import PostService


router = APIRouter()


@router.post(
    "",
    response_model=PostCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a post",
)
async def create_post(
    data: PostCreate,
    caller: Caller = Depends(get_current_caller),
    service: PostService = Depends(get_post_service),
) -> PostCreated:
    """Create a post authored by the caller and return its id."""
    try:
        post_id = await service.create_post(caller, data.title, data.content)
    except BlogServiceError as e:
        raise http_error(e)
    return PostCreated(id=post_id)


@router.get(
    "",
    response_model=List[PostRead],
    summary="List all posts",
)
async def list_posts(service: PostService = Depends(get_post_service)) -> List[PostRead]:
    return await service.get_all_posts()


@router.get(
    "/{post_id}",
    response_model=PostRead,
    summary="Get a single post",
)
async def get_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> PostRead:
    post = await service.get_post(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Post {post_id} not found")
    return post
