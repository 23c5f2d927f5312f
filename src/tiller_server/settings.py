"""Pydantic-based settings for the Tiller control plane."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the Tiller server."""

    model_config = SettingsConfigDict(
        env_prefix="TILLER_SERVER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=4747, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Database settings
    database_url: str = Field(default="sqlite+aiosqlite:///tiller.db", description="Database URL")

    # Authentication; requests are not checked when unset
    token: Optional[str] = Field(default=None, description="Bearer token required by the API")
