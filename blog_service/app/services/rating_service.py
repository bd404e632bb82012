"""
Business logic for ratings.

Each caller holds at most one rating per post; rating again replaces
the previous value.  The ``ratings`` table enforces this with a
composite primary key on ``(post_id, user_id)`` and writes go through
an upsert, so concurrent ratings from the same caller cannot produce
duplicates.

Aggregation distinguishes a missing post from an unrated one in
``summarize_ratings``; ``get_aggregated_rating`` collapses both to
``None`` for callers that only want the mean.
"""

import logging
from typing import List, Optional

from ..core.config import Settings, settings as default_settings
from ..core.db import BlogStore, fits_integer_column
from ..core.exceptions import InvalidArgument, NotFound
from ..core.security import Caller
from ..schemas.rating import RatingRead, RatingSummary

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


class RatingService:
    """Service for rating posts and aggregating the results."""

    def __init__(self, store: BlogStore, settings: Optional[Settings] = None) -> None:
        self.store = store
        self.settings = settings or default_settings

    async def rate_post(self, caller: Caller, post_id: int, value: int) -> None:
        """Insert or replace the caller's rating of a post.

        Raises ``InvalidArgument`` for a value outside 1..5 (or for
        rating one's own post when ``allow_self_rating`` is off) and
        ``NotFound`` if the post does not exist.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument("Rating value must be an integer")
        if value < MIN_RATING or value > MAX_RATING:
            raise InvalidArgument(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
        with self.store.transaction() as cursor:
            post = None
            if fits_integer_column(post_id):
                post = cursor.execute(
                    "SELECT author_id FROM posts WHERE id = ?", (post_id,)
                ).fetchone()
            if post is None:
                raise NotFound(f"Post {post_id} not found")
            if not self.settings.allow_self_rating and post["author_id"] == caller.principal:
                logger.warning("User %s tried to rate own post %s", caller.principal, post_id)
                raise InvalidArgument("Authors cannot rate their own posts")
            cursor.execute(
                """
                INSERT INTO ratings (post_id, user_id, value) VALUES (?, ?, ?)
                ON CONFLICT(post_id, user_id) DO UPDATE SET value = excluded.value
                """,
                (post_id, caller.principal, value),
            )
        logger.info("User %s rated post %s with %s", caller.principal, post_id, value)

    async def get_post_ratings(self, post_id: int) -> Optional[List[RatingRead]]:
        """Return one rating per rater, or ``None`` if the post does not exist.

        Ratings are ordered by when each rater first rated the post.
        """
        with self.store.transaction() as cursor:
            if not self._post_exists(cursor, post_id):
                return None
            rows = cursor.execute(
                "SELECT user_id, value FROM ratings WHERE post_id = ? ORDER BY rowid",
                (post_id,),
            ).fetchall()
        return [RatingRead(user_id=row["user_id"], value=row["value"]) for row in rows]

    async def summarize_ratings(self, post_id: int) -> Optional[RatingSummary]:
        """Return count and mean for a post, or ``None`` if it does not exist."""
        with self.store.transaction() as cursor:
            if not self._post_exists(cursor, post_id):
                return None
            row = cursor.execute(
                "SELECT COUNT(*) AS count, SUM(value) AS total FROM ratings WHERE post_id = ?",
                (post_id,),
            ).fetchone()
        count = row["count"]
        average = row["total"] / count if count else None
        return RatingSummary(post_id=post_id, count=count, average=average)

    async def get_aggregated_rating(self, post_id: int) -> Optional[float]:
        """Mean rating of a post; ``None`` if it is missing or unrated."""
        summary = await self.summarize_ratings(post_id)
        if summary is None:
            return None
        return summary.average

    @staticmethod
    def _post_exists(cursor, post_id: int) -> bool:
        if not fits_integer_column(post_id):
            return False
        return cursor.execute(
            "SELECT 1 FROM posts WHERE id = ?", (post_id,)
        ).fetchone() is not None
