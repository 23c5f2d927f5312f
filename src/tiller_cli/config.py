"""CLI settings, read from ``TILLER_*`` environment variables."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CLISettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TILLER_",
        case_sensitive=False,
        extra="ignore",
    )

    address: str = Field(default="http://127.0.0.1:4747", description="Control plane address")
    token: Optional[str] = Field(default=None, description="Bearer token sent with every request")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
