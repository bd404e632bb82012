"""
Tests for the ``blog_api`` HTTP client, run against the real app.
"""

import pytest

from blog_api import BlogAPI, BlogAPIError
from blog_service.app.core.security import create_access_token

BASE_URL = "http://testserver"


@pytest.fixture
def api_for(client, settings):
    def _api(principal=None):
        token = create_access_token(principal, settings.secret_key, 3600) if principal else None
        return BlogAPI(base_url=BASE_URL, token=token, session=client)

    return _api


class TestBlogAPI:
    def test_profile_operations(self, api_for):
        alice = api_for("alice")

        created = alice.create_profile("alice", "hello")
        assert created == {"id": "alice", "username": "alice", "bio": "hello"}

        updated = alice.update_bio("changed")
        assert updated["bio"] == "changed"

        assert api_for().get_profile("alice")["bio"] == "changed"
        assert api_for().get_profile("nobody") is None

    def test_post_operations(self, api_for):
        alice, bob = api_for("alice"), api_for("bob")

        first = alice.create_post("First", "a")
        second = bob.create_post("Second", "b")

        assert second > first
        assert api_for().get_post(first)["title"] == "First"
        assert api_for().get_post(second + 100) is None
        assert [p["id"] for p in api_for().get_all_posts()] == [first, second]
        assert [p["id"] for p in api_for().get_user_posts("bob")] == [second]
        assert api_for().get_user_posts("nobody") == []

    def test_rating_operations(self, api_for):
        post_id = api_for("alice").create_post("Rated", "content")
        reader = api_for()

        assert reader.get_aggregated_rating(post_id) is None
        assert reader.get_post_ratings(post_id) == []

        api_for("bob").rate_post(post_id, 2)
        api_for("carol").rate_post(post_id, 4)

        assert reader.get_aggregated_rating(post_id) == 3.0
        assert len(reader.get_post_ratings(post_id)) == 2
        assert reader.get_post_ratings(post_id + 1) is None
        assert reader.get_aggregated_rating(post_id + 1) is None

    def test_errors_carry_status_and_detail(self, api_for):
        alice = api_for("alice")
        alice.create_profile("alice")

        with pytest.raises(BlogAPIError) as excinfo:
            alice.create_profile("alice")
        assert excinfo.value.status_code == 409
        assert "already exists" in excinfo.value.detail

        post_id = alice.create_post("Title", "content")
        with pytest.raises(BlogAPIError) as excinfo:
            alice.rate_post(post_id, 6)
        assert excinfo.value.status_code == 400

    def test_writes_without_token_fail(self, api_for):
        with pytest.raises(BlogAPIError) as excinfo:
            api_for().create_post("Title", "content")
        assert excinfo.value.status_code == 401

    def test_missing_post_on_write_raises(self, api_for):
        with pytest.raises(BlogAPIError) as excinfo:
            api_for("bob").rate_post(999, 3)
        assert excinfo.value.status_code == 404
