"""
Business logic for posts.

Posts are stored in the ``posts`` table.  Identifiers come from SQLite's
``AUTOINCREMENT``, so they start at 1, strictly increase and are never
handed out twice, even if rows were ever removed.  Listings are always
returned in insertion order.
"""

import logging
import time
from typing import List, Optional

from ..core.config import Settings, settings as default_settings
from ..core.db import BlogStore, fits_integer_column
from ..core.exceptions import NotFound
from ..core.security import Caller
from ..schemas.post import PostRead
from .validation import TITLE_MAX_LENGTH, clean_text

logger = logging.getLogger(__name__)

_POST_COLUMNS = "id, title, content, author_id, created_at"


def _row_to_post(row) -> PostRead:
    return PostRead(
        id=row["id"],
        title=row["title"],
        content=row["content"],
        author_id=row["author_id"],
        created_at=row["created_at"],
    )


class PostService:
    """Service for publishing and listing posts."""

    def __init__(self, store: BlogStore, settings: Optional[Settings] = None) -> None:
        self.store = store
        self.settings = settings or default_settings

    async def create_post(self, caller: Caller, title: str, content: str) -> int:
        """Publish a post authored by the caller and return its id.

        ``created_at`` is stamped in nanoseconds.  When
        ``require_profile_for_posting`` is enabled, a caller without a
        profile gets ``NotFound``.
        """
        title = clean_text(title, "title", TITLE_MAX_LENGTH)
        content = clean_text(content, "content")
        with self.store.transaction() as cursor:
            if self.settings.require_profile_for_posting:
                profile = cursor.execute(
                    "SELECT id FROM users WHERE id = ?", (caller.principal,)
                ).fetchone()
                if profile is None:
                    logger.warning("Post attempt by %s without a profile", caller.principal)
                    raise NotFound(f"Profile for {caller.principal} not found")
            cursor.execute(
                "INSERT INTO posts (title, content, author_id, created_at) VALUES (?, ?, ?, ?)",
                (title, content, caller.principal, time.time_ns()),
            )
            post_id = cursor.lastrowid
        logger.info("User %s created post %s", caller.principal, post_id)
        return post_id

    async def get_post(self, post_id: int) -> Optional[PostRead]:
        """Retrieve a single post, or ``None`` if the id was never issued."""
        if not fits_integer_column(post_id):
            return None
        with self.store.transaction() as cursor:
            row = cursor.execute(
                f"SELECT {_POST_COLUMNS} FROM posts WHERE id = ?", (post_id,)
            ).fetchone()
        return _row_to_post(row) if row else None

    async def get_all_posts(self) -> List[PostRead]:
        """Return every post in the order it was created."""
        with self.store.transaction() as cursor:
            rows = cursor.execute(
                f"SELECT {_POST_COLUMNS} FROM posts ORDER BY id"
            ).fetchall()
        return [_row_to_post(row) for row in rows]

    async def get_user_posts(self, user_id: str) -> List[PostRead]:
        """Return the posts authored by ``user_id`` in creation order.

        The result is empty, never ``None``, for unknown users.
        """
        with self.store.transaction() as cursor:
            rows = cursor.execute(
                f"SELECT {_POST_COLUMNS} FROM posts WHERE author_id = ? ORDER BY id",
                (user_id,),
            ).fetchall()
        return [_row_to_post(row) for row in rows]
