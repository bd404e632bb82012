"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (profiles, posts, ratings,
users) under a unified prefix.  When new endpoints are added, update
this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import posts, profiles, ratings, users

router = APIRouter()

router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
# The ratings router defines its own "/posts/{post_id}/..." paths.
router.include_router(ratings.router, tags=["ratings"])
router.include_router(users.router, prefix="/users", tags=["users"])
