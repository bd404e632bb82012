"""
Pytest configuration and shared fixtures for the Blog Service tests.
"""

import pytest
from fastapi.testclient import TestClient

from blog_service.app.core.config import Settings
from blog_service.app.core.db import BlogStore
from blog_service.app.core.security import Caller, create_access_token
from blog_service.app.main import create_app
from blog_service.app.services.post_service import PostService
from blog_service.app.services.profile_service import ProfileService
from blog_service.app.services.rating_service import RatingService


@pytest.fixture
def settings():
    return Settings(database_url=":memory:")


@pytest.fixture
def store():
    store = BlogStore(":memory:")
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def profiles(store):
    return ProfileService(store)


@pytest.fixture
def posts(store, settings):
    return PostService(store, settings)


@pytest.fixture
def ratings(store, settings):
    return RatingService(store, settings)


@pytest.fixture
def alice():
    return Caller(principal="alice")


@pytest.fixture
def bob():
    return Caller(principal="bob")


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(settings):
    def _headers(principal: str) -> dict:
        token = create_access_token(
            principal, settings.secret_key, settings.access_token_expire_minutes * 60
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
