"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts locally without any setup; in a deployment override
them via the environment (for example ``EXTERNAL_URL`` must point to
the metadata provider before songs can be created).
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Song Library API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path to the SQLite database.  Relative paths are resolved against
    # the ``song_library_api`` package directory by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "song_library.db")

    # Endpoint of the external metadata provider queried on song
    # creation with ``group`` and ``song`` query parameters.
    external_api_url: str = os.getenv("EXTERNAL_URL", "")
    enrichment_timeout: float = float(os.getenv("ENRICHMENT_TIMEOUT", "15"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8085"))


# Environment variables must be set before this module is imported.
settings = Settings()
