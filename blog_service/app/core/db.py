"""
SQLite data store and simple migration system.

``BlogStore`` owns the single database connection used by the service.
Every read and write goes through ``BlogStore.transaction``, which holds
one re-entrant lock for the duration of the operation and commits or
rolls back as a unit.  Requests are therefore serialized: no caller can
observe a half-written post or rating, and two concurrent writers can
never interleave.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.  Each
migration runs in the same transaction as the row recording it.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

# Range of SQLite INTEGER columns; larger ids can never have been issued.
SQLITE_MIN_INTEGER = -(2**63)
SQLITE_MAX_INTEGER = 2**63 - 1

MIGRATIONS: list[tuple[int, list[str]]] = [
    # Migration 1: Initial schema
    (
        1,
        [
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                username TEXT NOT NULL,
                bio TEXT NOT NULL DEFAULT ''
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS posts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                author_id TEXT NOT NULL,
                created_at INTEGER NOT NULL
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS ratings (
                post_id INTEGER NOT NULL,
                user_id TEXT NOT NULL,
                value INTEGER NOT NULL CHECK (value BETWEEN 1 AND 5),
                PRIMARY KEY (post_id, user_id),
                FOREIGN KEY(post_id) REFERENCES posts(id)
            )
            """,
        ],
    ),
    # Migration 2: lookups by author and by post
    (
        2,
        [
            "CREATE INDEX IF NOT EXISTS idx_posts_author_id ON posts(author_id)",
            "CREATE INDEX IF NOT EXISTS idx_ratings_post_id ON ratings(post_id)",
        ],
    ),
]


def fits_integer_column(value: int) -> bool:
    """Whether ``value`` can be bound to an SQLite INTEGER parameter."""
    return SQLITE_MIN_INTEGER <= value <= SQLITE_MAX_INTEGER


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged.  Relative
    paths are resolved against the project root.
    """
    if database_url == MEMORY_DATABASE or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class BlogStore:
    """The service's single shared data store.

    Holds one SQLite connection opened with ``check_same_thread=False``
    so that worker threads of the ASGI server can share it; the lock
    guarantees only one of them uses it at a time.
    """

    def __init__(self, database_url: str = MEMORY_DATABASE) -> None:
        self.path = resolve_database_path(database_url)
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        # Return rows as dict-like objects keyed by column name
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor with exclusive access to the store.

        Commits when the block exits normally and rolls back when it
        raises, so a rejected operation never leaves a partial write.
        """
        with self._lock:
            cursor = self._conn.cursor()
            try:
                yield cursor
                self._conn.commit()
            except BaseException:
                self._conn.rollback()
                raise
            finally:
                cursor.close()

    def init_db(self) -> None:
        """Create the ``migrations`` table and apply pending migrations.

        All pending migrations and their ``migrations`` rows commit
        together or not at all.
        """
        with self.transaction() as cursor:
            # sqlite3 only opens transactions implicitly before DML, so
            # begin explicitly to cover the DDL below.
            if not self._conn.in_transaction:
                cursor.execute("BEGIN")
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, statements in MIGRATIONS:
                if version > current_version:
                    for statement in statements:
                        cursor.execute(statement)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    logger.info("Applied migration %s to %s", version, self.path)
                    current_version = version

    def close(self) -> None:
        with self._lock:
            self._conn.close()

