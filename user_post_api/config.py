"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment override
them via environment variables.

This module sits outside ``app`` so the client package can read the
assistant settings without building the server.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Post Assistant API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file written in addition to the console.
    log_file: str = os.getenv("LOG_FILE", "")

    # Secret shared with the OAuth session provider.  Session tokens are
    # verified with it; ``AUTH_SECRET`` is accepted for compatibility with
    # the web front end's environment.
    secret_key: str = os.getenv("SECRET_KEY", os.getenv("AUTH_SECRET", "change_me"))
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 30)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "user_post.db")
    # Seconds a connection waits for a competing writer before failing.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "5"))

    # Assistant service used by the client package to post thread
    # messages.  Both are optional; without a base URL notifications are
    # disabled.
    assistant_base_url: str = os.getenv("ASSISTANT_BASE_URL", "")
    assistant_api_key: str = os.getenv("ASSISTANT_API_KEY", "")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables should
# be set before importing this module.
settings = Settings()
