"""
Configuration management.

The ``Settings`` dataclass reads configuration from environment
variables.  Values are resolved when ``Settings.from_env()`` is called,
not at import time, and the resulting object is handed explicitly to
``create_app`` and to the ``Database`` gateway.  Tests build their own
``Settings`` pointing at a temporary database file.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    project_name: str = "Travel Agency API"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    # Optional path of a log file in addition to console output.
    log_file: Optional[str] = None

    # Path to the SQLite database file.  Relative paths are resolved
    # against the working directory of the process by ``core.db``.
    database_url: str = "travel_agency.db"

    # Seconds a connection waits for a competing writer to release the
    # database lock before failing with "database is locked".
    database_timeout: float = 5.0

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment, falling back to defaults."""
        return cls(
            project_name=os.getenv("PROJECT_NAME", cls.project_name),
            api_version=os.getenv("API_VERSION", cls.api_version),
            debug=_env_bool("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            log_file=os.getenv("LOG_FILE") or None,
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            database_timeout=float(os.getenv("DATABASE_TIMEOUT", str(cls.database_timeout))),
        )
