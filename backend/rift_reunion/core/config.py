"""Configuration settings for the Rift Reunion application."""

from __future__ import annotations

from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

# Riot caps match-id list requests at 100 entries
MAX_HISTORY_BATCH_SIZE = 100


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Riot API credential (empty means not configured)
    riot_api_key: str = Field(default="")

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    # Comparison defaults
    default_region: str = Field(
        default="euw1", description="Platform used when a request omits the region"
    )
    match_history_limit: int = Field(
        default=500, ge=1, description="Maximum match IDs fetched per player"
    )
    history_batch_size: int = Field(
        default=MAX_HISTORY_BATCH_SIZE,
        ge=1,
        description="Match IDs requested per history page",
    )

    # Upstream pacing (seconds)
    history_page_delay: float = Field(
        default=0.05, ge=0, description="Pause between match history pages"
    )
    rate_limit_backoff: float = Field(
        default=1.0, ge=0, description="Pause before retrying a throttled page"
    )
    rate_limit_max_retries: Optional[int] = Field(
        default=None,
        ge=0,
        description="Consecutive 429 retries allowed per page (None = unbounded)",
    )
    detail_request_delay: float = Field(
        default=0.1, ge=0, description="Pause between match detail requests"
    )
    detail_concurrency: int = Field(
        default=1, ge=1, description="Match detail requests allowed in flight"
    )

    # Inbound rate limiting (slowapi syntax)
    compare_rate_limit: str = Field(default="20/minute")

    @field_validator("history_batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        """Clamp the page size to what the Riot API accepts."""
        return min(v, MAX_HISTORY_BATCH_SIZE)

    @property
    def has_riot_api_key(self) -> bool:
        """Whether a usable Riot API key is configured."""
        return bool(self.riot_api_key) and self.riot_api_key != "your_riot_api_key_here"

    def require_riot_api_key(self) -> str:
        """Return the Riot API key or raise ConfigurationError.

        :returns: Configured Riot API key
        :raises ConfigurationError: If no key is configured
        """
        if not self.has_riot_api_key:
            raise ConfigurationError(
                "Riot API key not configured", setting="riot_api_key"
            )
        return self.riot_api_key

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
