"""
FastAPI dependencies that hand endpoints their services.

The store and settings are owned by the application (see
``main.create_app``); each request gets lightweight service objects
bound to them.
"""

from fastapi import HTTPException, Request

from blog_service.app.core.exceptions import BlogServiceError
from blog_service.app.services.post_service import PostService
from blog_service.app.services.profile_service import ProfileService
from blog_service.app.services.rating_service import RatingService


def get_profile_service(request: Request) -> ProfileService:
    return ProfileService(request.app.state.store)


def get_post_service(request: Request) -> PostService:
    return PostService(request.app.state.store, request.app.state.settings)


def get_rating_service(request: Request) -> RatingService:
    return RatingService(request.app.state.store, request.app.state.settings)


def http_error(exc: BlogServiceError) -> HTTPException:
    """Translate a service failure into the matching HTTP error."""
    return HTTPException(status_code=exc.status_code, detail=str(exc))
