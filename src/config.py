"""Configuration settings for the checklist service."""

import os
from typing import Optional

from sqlalchemy.engine import make_url


def get_database_uri() -> Optional[str]:
    """
    Get the database URI from environment variables.

    DATABASE_PASSWORD, when set, is merged into DATABASE_URL as the credential.
    Returns None when no database is configured.
    """
    url = os.environ.get("DATABASE_URL")
    if not url:
        return None
    password = os.environ.get("DATABASE_PASSWORD")
    if password:
        return make_url(url).set(password=password).render_as_string(hide_password=False)
    return url


def get_api_port() -> int:
    """Get API listening port from environment variables."""
    return int(os.environ.get("PORT", "3000"))


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()
