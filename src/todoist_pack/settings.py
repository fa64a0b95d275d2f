"""
Todoist Pack settings.

Values are read from the environment (prefix ``TODOIST_``) or a ``.env``
file in the working directory:

    TODOIST_ACCESS_TOKEN     OAuth2 access token (required to run the server)
    TODOIST_CLIENT_ID        OAuth2 client id
    TODOIST_CLIENT_SECRET    OAuth2 client secret
    TODOIST_TIMEOUT          HTTP timeout in seconds
    TODOIST_CACHE_TTL_SECS   Lifetime of cached GET responses
    TODOIST_LOG_LEVEL        Logging level for the server
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the pack and its MCP server."""

    model_config = SettingsConfigDict(
        env_prefix="TODOIST_",
        env_file=".env",
        extra="ignore",
    )

    access_token: Optional[str] = Field(default=None, description="OAuth2 access token")
    client_id: Optional[str] = Field(default=None, description="OAuth2 client id")
    client_secret: Optional[str] = Field(default=None, description="OAuth2 client secret")
    timeout: float = Field(default=30.0, gt=0)
    cache_ttl_secs: int = Field(default=60, ge=0)
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
