"""
Configuration and settings for the search and sheets proxy backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Row store (any SQLAlchemy URL, SQLite by default)
    database_url: str = Field(default="sqlite+pysqlite:///app.db")
    seed_on_startup: bool = Field(default=True)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)

    # Google service account used by the sheets proxy
    google_service_account_email: Optional[str] = Field(default=None)
    google_private_key: Optional[SecretStr] = Field(default=None)
    google_token_uri: str = Field(default="https://oauth2.googleapis.com/token")

    # Sheets API
    sheets_api_base_url: str = Field(default="https://sheets.googleapis.com")
    sheets_request_timeout: float = Field(default=30.0, gt=0)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
