"""
NoteDesk Backend: Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by the app factory, the entry point and the test suite.
When:  Loaded once at module import time; validated before the app starts.

Environment variables:
    DATABASE_URL   SQLAlchemy async URL of the embedded store
    HOST / PORT    Listening address (PORT defaults to 5000)
    CORS_ORIGINS   Comma-separated origins, "*" for any
    LOG_LEVEL      DEBUG, INFO, WARNING, ERROR or CRITICAL
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a development default, so the service starts with an
    empty environment and writes `notes.db` in the working directory.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path>  (three slashes = relative path)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./notes.db",
        description="Async SQLAlchemy URL of the notes database",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    # "*" accepts requests from any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
    }


settings = Settings()
