"""
Rating endpoints for API v1.

A caller rates a post with ``PUT``: the first call records the rating,
later calls replace it.  The aggregate route reports both the number of
ratings and their mean so clients can tell an unrated post (``average``
is null) from a missing one (404).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from blog_service.app.api.v1.dependencies import get_rating_service, http_error
from blog_service.app.core.exceptions import BlogServiceError
from blog_service.app.core.security import Caller, get_current_caller
from blog_service.app.schemas.rating import RatingCreate, RatingRead, RatingSummary
from blog_service.app.services.rating_service import RatingService


router = APIRouter()


@router.put(
    "/posts/{post_id}/rating",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Rate a post",
)
async def rate_post(
    post_id: int,
    data: RatingCreate,
    caller: Caller = Depends(get_current_caller),
    service: RatingService = Depends(get_rating_service),
) -> None:
    """Record or replace the caller's rating (1 to 5) of a post."""
    try:
        await service.rate_post(caller, post_id, data.value)
    except BlogServiceError as e:
        raise http_error(e)
    return None


@router.get(
    "/posts/{post_id}/ratings",
    response_model=List[RatingRead],
    summary="List a post's ratings",
)
async def list_ratings(
    post_id: int,
    service: RatingService = Depends(get_rating_service),
) -> List[RatingRead]:
    ratings = await service.get_post_ratings(post_id)
    if ratings is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Post {post_id} not found")
    return ratings


@router.get(
    "/posts/{post_id}/rating",
    response_model=RatingSummary,
    summary="Get a post's aggregated rating",
)
async def get_aggregated_rating(
    post_id: int,
    service: RatingService = Depends(get_rating_service),
) -> RatingSummary:
    summary = await service.summarize_ratings(post_id)
    if summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Post {post_id} not found")
    return summary
