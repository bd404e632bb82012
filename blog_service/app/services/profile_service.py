"""
Business logic for user profiles.

A profile is keyed by the principal of the caller that created it.
There is no operation that takes another user's identity for a write:
``update_bio`` always targets the caller's own profile, which is the
whole of the ownership check.
"""

import logging
from typing import Optional

from ..core.db import BlogStore
from ..core.exceptions import AlreadyExists, NotFound
from ..core.security import Caller
from ..schemas.user import UserRead
from .validation import BIO_MAX_LENGTH, USERNAME_MAX_LENGTH, clean_text

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for creating, reading and updating profiles."""

    def __init__(self, store: BlogStore) -> None:
        self.store = store

    async def create_profile(self, caller: Caller, username: str, bio: str) -> None:
        """Create the caller's profile.

        Raises ``AlreadyExists`` if the caller already has one and
        ``InvalidArgument`` if the username is blank or either field is
        too long.
        """
        username = clean_text(username, "username", USERNAME_MAX_LENGTH, trim=True)
        bio = clean_text(bio, "bio", BIO_MAX_LENGTH, allow_blank=True)
        with self.store.transaction() as cursor:
            existing = cursor.execute(
                "SELECT id FROM users WHERE id = ?", (caller.principal,)
            ).fetchone()
            if existing:
                logger.warning("Duplicate profile creation by %s", caller.principal)
                raise AlreadyExists(f"Profile for {caller.principal} already exists")
            cursor.execute(
                "INSERT INTO users (id, username, bio) VALUES (?, ?, ?)",
                (caller.principal, username, bio),
            )
        logger.info("Created profile %r for %s", username, caller.principal)

    async def get_profile(self, user_id: str) -> Optional[UserRead]:
        """Retrieve a profile by principal, or ``None`` if there is none."""
        with self.store.transaction() as cursor:
            row = cursor.execute(
                "SELECT id, username, bio FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        if row is None:
            return None
        return UserRead(id=row["id"], username=row["username"], bio=row["bio"])

    async def update_bio(self, caller: Caller, bio: str) -> None:
        """Replace the caller's bio.

        Raises ``NotFound`` without touching the store if the caller has
        no profile.
        """
        bio = clean_text(bio, "bio", BIO_MAX_LENGTH, allow_blank=True)
        with self.store.transaction() as cursor:
            cursor.execute(
                "UPDATE users SET bio = ? WHERE id = ?", (bio, caller.principal)
            )
            if cursor.rowcount == 0:
                logger.warning("Bio update by %s without a profile", caller.principal)
                raise NotFound(f"Profile for {caller.principal} not found")
        logger.info("Updated bio for %s", caller.principal)
