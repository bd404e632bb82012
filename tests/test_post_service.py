"""
Post management tests
"""

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from blog_service.app.core.config import Settings
from blog_service.app.core.exceptions import InvalidArgument, NotFound
from blog_service.app.services.post_service import PostService


class TestPostService:
    @pytest.mark.asyncio
    async def test_create_post_records_author_and_timestamp(self, posts, alice):
        before = time.time_ns()
        post_id = await posts.create_post(alice, "Title", "Body")
        after = time.time_ns()

        post = await posts.get_post(post_id)
        assert post.id == post_id
        assert post.title == "Title"
        assert post.content == "Body"
        assert post.author_id == "alice"
        assert before <= post.created_at <= after

    @pytest.mark.asyncio
    async def test_ids_strictly_increase(self, posts, alice, bob):
        ids = []
        for i in range(5):
            caller = alice if i % 2 else bob
            ids.append(await posts.create_post(caller, f"Post {i}", "content"))

        assert ids[0] == 1
        assert all(a < b for a, b in zip(ids, ids[1:]))

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self, posts, alice):
        post_id = await posts.create_post(alice, "Title", "Body")

        assert await posts.get_post(post_id + 1) is None
        assert await posts.get_post(0) is None
        assert await posts.get_post(-3) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("post_id", [2**63, 2**64, -(2**64)])
    async def test_id_beyond_integer_range_returns_none(self, posts, alice, post_id):
        await posts.create_post(alice, "Title", "Body")

        assert await posts.get_post(post_id) is None

    @pytest.mark.asyncio
    async def test_text_is_stored_as_given(self, posts, alice):
        post_id = await posts.create_post(alice, "  Spaced title ", "    indented()\n")

        post = await posts.get_post(post_id)
        assert post.title == "  Spaced title "
        assert post.content == "    indented()\n"

    @pytest.mark.asyncio
    async def test_get_all_posts_in_insertion_order(self, posts, alice, bob):
        first = await posts.create_post(alice, "First", "a")
        second = await posts.create_post(bob, "Second", "b")
        third = await posts.create_post(alice, "Third", "c")

        all_posts = await posts.get_all_posts()
        assert [p.id for p in all_posts] == [first, second, third]

    @pytest.mark.asyncio
    async def test_get_all_posts_empty(self, posts):
        assert await posts.get_all_posts() == []

    @pytest.mark.asyncio
    async def test_get_user_posts_filters_by_author(self, posts, alice, bob):
        a1 = await posts.create_post(alice, "A1", "a")
        await posts.create_post(bob, "B1", "b")
        a2 = await posts.create_post(alice, "A2", "a")

        alice_posts = await posts.get_user_posts("alice")
        assert [p.id for p in alice_posts] == [a1, a2]
        assert all(p.author_id == "alice" for p in alice_posts)

    @pytest.mark.asyncio
    async def test_get_user_posts_for_unknown_user_is_empty(self, posts, alice):
        await posts.create_post(alice, "A1", "a")

        assert await posts.get_user_posts("nobody") == []

    @pytest.mark.asyncio
    async def test_posting_without_profile_is_allowed_by_default(self, posts, profiles, alice):
        post_id = await posts.create_post(alice, "No profile", "yet")

        assert await profiles.get_profile("alice") is None
        assert (await posts.get_post(post_id)).author_id == "alice"

    @pytest.mark.asyncio
    async def test_posting_with_profile(self, posts, profiles, alice):
        await profiles.create_profile(alice, "alice", "")

        post_id = await posts.create_post(alice, "With profile", "content")

        assert [p.id for p in await posts.get_user_posts("alice")] == [post_id]

    @pytest.mark.asyncio
    async def test_profile_required_when_configured(self, store, profiles, alice):
        strict = PostService(store, Settings(database_url=":memory:", require_profile_for_posting=True))

        with pytest.raises(NotFound):
            await strict.create_post(alice, "Title", "Body")
        assert await strict.get_all_posts() == []

        await profiles.create_profile(alice, "alice", "")
        post_id = await strict.create_post(alice, "Title", "Body")
        assert post_id == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,content",
        [("", "body"), ("   ", "body"), ("title", ""), ("title", " \n "), ("x" * 201, "body")],
    )
    async def test_invalid_text_is_rejected(self, posts, alice, title, content):
        with pytest.raises(InvalidArgument):
            await posts.create_post(alice, title, content)
        assert await posts.get_all_posts() == []

    @pytest.mark.asyncio
    async def test_rejected_post_does_not_consume_an_id(self, posts, alice):
        with pytest.raises(InvalidArgument):
            await posts.create_post(alice, "", "body")

        assert await posts.create_post(alice, "Title", "body") == 1

    def test_concurrent_creators_never_share_an_id(self, posts, alice):
        def create_many(worker):
            return [
                asyncio.run(posts.create_post(alice, f"w{worker}-{i}", "content"))
                for i in range(10)
            ]

        with ThreadPoolExecutor(max_workers=4) as pool:
            ids = [post_id for batch in pool.map(create_many, range(4)) for post_id in batch]

        assert len(ids) == 40
        assert len(set(ids)) == 40
        assert sorted(ids) == list(range(1, 41))
