"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
Secrets (ANTHROPIC_API_KEY) come from the environment or .env, never from code.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # ANTHROPIC
    # ===================
    anthropic_api_key: Optional[str] = Field(
        None,
        description="Anthropic API key for list extraction and matching"
    )
    matcher_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model used for extraction and matching"
    )
    matcher_max_tokens: int = Field(
        default=4000,
        ge=256,
        le=16000,
        description="Max response tokens for the matching call"
    )
    extraction_max_tokens: int = Field(
        default=2000,
        ge=256,
        le=16000,
        description="Max response tokens for the list extraction call"
    )
    matcher_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Per-request timeout for the Claude API"
    )

    # ===================
    # RETRY POLICY
    # ===================
    matcher_max_attempts: int = Field(
        default=4,
        ge=1,
        le=10,
        description="Total attempts for a Claude call (first try included)"
    )
    matcher_retry_delays: tuple[float, ...] = Field(
        default=(2.0, 4.0, 8.0),
        description="Seconds to wait before retry 1, 2, 3... (last value repeats)"
    )
    matcher_max_retry_delay: float = Field(
        default=30.0,
        ge=0,
        description="Cap for server-supplied retry-after delays"
    )

    # ===================
    # CATALOG & SHORTLIST
    # ===================
    catalog_path: str = Field(
        default="data/catalog.json",
        description="Path to the catalog JSON file (relative to the backend dir)"
    )
    shortlist_max_results: int = Field(
        default=300,
        ge=1,
        le=1000,
        description="Maximum products sent to the matcher"
    )
    shortlist_min_scored: int = Field(
        default=50,
        ge=0,
        description="Below this many scored products, backfill with unscored ones"
    )
    shortlist_backfill_target: int = Field(
        default=100,
        ge=0,
        description="Shortlist size the backfill tops up to"
    )
    prompt_max_catalog_chars: int = Field(
        default=60000,
        ge=1000,
        description="Character budget for the catalog block of the matching prompt"
    )

    # ===================
    # UPLOADS
    # ===================
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1024,
        description="Maximum uploaded list size"
    )
    min_extracted_text_chars: int = Field(
        default=10,
        ge=0,
        description="Extracted text shorter than this counts as unreadable"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=3001,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API (the widget is embedded in the store)"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def matcher_configured(self) -> bool:
        """Check if the Claude API key is set."""
        return bool(self.anthropic_api_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
