"""
Application settings and configuration management.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from channelpulse import __version__

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="channelpulse")
    app_version: str = Field(default=__version__)
    log_level: str = Field(default="INFO")

    # Channel
    channel_handle: str = Field(default="disboyrbx")
    channel_id: Optional[str] = Field(default=None)

    # YouTube Data API
    youtube_api_key: str = Field(default="")

    # Fetching
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    request_timeout: float = Field(default=15.0)

    # Cache
    cache_ttl_seconds: float = Field(default=600.0)

    # API server
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)
    api_reload: bool = Field(default=False)

    @field_validator("channel_handle")
    @classmethod
    def strip_handle_prefix(cls, v: str) -> str:
        """Store the handle without its leading ``@``."""
        v = v.strip().lstrip("@")
        if not v:
            raise ValueError("channel_handle must not be empty")
        return v

    @field_validator("channel_id", mode="before")
    @classmethod
    def blank_channel_id_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty channel id as not configured."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("cache_ttl_seconds", "request_timeout")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Durations must be positive."""
        if v <= 0:
            raise ValueError(f"duration must be greater than 0, got {v}")
        return v

    @property
    def display_handle(self) -> str:
        """Handle as shown to users, with the ``@`` prefix."""
        return f"@{self.channel_handle}"

    model_config = {
        "env_prefix": "CHANNELPULSE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# Global settings instance
settings = get_settings()
