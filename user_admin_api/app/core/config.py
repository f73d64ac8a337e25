"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the API can be
started locally without any setup; a file based SQLite database is
created in the current working directory.  In a production deployment
override these via environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Admin API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # SQLAlchemy database URL.  Any dialect supported by SQLAlchemy may be
    # used; SQLite is the default so that no server is required.
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./users.db")

    # Echo every SQL statement through the ``sqlalchemy.engine`` logger.
    sql_echo: bool = _env_flag("SQL_ECHO")

    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# therefore be set before importing this module.
settings = Settings()
