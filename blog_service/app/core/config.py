"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can start without any configuration at all.  In a production
deployment you should at least override ``SECRET_KEY`` and
``DATABASE_URL``.
"""

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Blog Service"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    secret_key: str = field(default_factory=lambda: os.getenv("SECRET_KEY", "change_me"))
    access_token_expire_minutes: int = field(
        default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    )

    # Path to the SQLite database file.  ``:memory:`` keeps all state in
    # the process and is discarded on shutdown.  Relative paths are
    # resolved against the project root by the ``db`` module.
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "blog.db"))

    # Whether the author of a post may rate it.
    allow_self_rating: bool = field(default_factory=lambda: _env_flag("ALLOW_SELF_RATING", "true"))

    # Whether ``create_post`` requires the caller to have a profile.
    require_profile_for_posting: bool = field(
        default_factory=lambda: _env_flag("REQUIRE_PROFILE_FOR_POSTING", "false")
    )

    api_host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Tests build their own
# ``Settings`` instances and pass them to ``create_app``.
settings = Settings()
