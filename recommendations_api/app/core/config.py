"""
Environment-driven configuration.

The ``Settings`` dataclass reads every value from environment
variables at instantiation time and provides defaults suitable for
local development.  Override them in the process environment (or a
container definition) before importing the application.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Music Recommendations API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Routers are mounted under this prefix.  Empty by default so that
    # ``/recommendations`` is served at the root.
    api_prefix: str = os.getenv("API_PREFIX", "")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "recommendations.db")
    # Seconds a connection waits for a competing writer to release the
    # database lock before giving up.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "5.0"))

    # How many low scorers one recommendation above the high score
    # threshold is worth in the weighted random draw.  Must exceed 1.
    random_high_band_weight: float = float(os.getenv("RANDOM_HIGH_BAND_WEIGHT", "3.0"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    def __post_init__(self) -> None:
        if not 1.0 < self.random_high_band_weight < float("inf"):
            raise ValueError("RANDOM_HIGH_BAND_WEIGHT must be a finite number greater than 1")
        if self.database_url.strip() == ":memory:":
            raise ValueError("DATABASE_URL must point to a file; in-memory databases are per connection")


settings = Settings()
