"""Configuration and settings management using pydantic-settings."""
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_prefix="FETIAS_NODES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core settings
    env: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Log level")

    # HTTP
    http_timeout_s: float = Field(
        default=30.0,
        description="Timeout applied to every outbound HTTP request",
    )

    # FETIAS API
    fetias_base_url: str = Field(
        default="https://app01.fetias.com/api",
        description="FETIAS API origin; endpoints are appended to it",
    )
    fetias_auth_prefix: str = Field(
        default="fsk",
        description="Token placed before the API key in the Authorization header",
    )
    fetias_page_size: int = Field(
        default=200,
        description="Page size requested by the FETIAS paginator",
    )
    fetias_max_pages: Optional[int] = Field(
        default=None,
        description="Optional cap on pages fetched by the paginator (None = unbounded)",
    )

    # FriendGrid
    friendgrid_base_url: str = Field(
        default="https://app01.fetias.com/api/profile",
        description="FriendGrid contacts endpoint",
    )

    @field_validator("fetias_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate that the page size is positive."""
        if v <= 0:
            raise ValueError("fetias_page_size must be positive")
        return v

    @field_validator("fetias_max_pages")
    @classmethod
    def validate_max_pages(cls, v: Optional[int]) -> Optional[int]:
        """Validate that the page cap, when set, is positive."""
        if v is not None and v <= 0:
            raise ValueError("fetias_max_pages must be positive")
        return v


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
