"""Application configuration using Pydantic Settings.

This module defines all application configuration loaded from environment variables.
Configuration is validated at startup and provides type-safe access throughout the app.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration.

    All configuration is loaded from environment variables or .env file.
    Validation happens automatically via Pydantic.

    Example:
        >>> config = Config()
        >>> print(config.app_name)
        'Sequencer'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = Field(default="Sequencer", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # ============================================
    # API Settings
    # ============================================
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"], description="Allowed CORS origins"
    )
    cors_allow_credentials: bool = Field(default=True, description="Allow CORS credentials")

    # ============================================
    # Database Settings
    # ============================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./sequencer.db",
        description="Async SQLAlchemy connection URL for documents and submissions",
    )
    database_echo: bool = Field(default=False, description="Echo SQL queries")

    # ============================================
    # Google / YouTube read APIs
    # ============================================
    google_api_key: str = Field(
        default="", description="API key for the Drive and YouTube Data v3 APIs"
    )
    http_timeout: float = Field(default=30.0, ge=1.0, le=120.0, description="HTTP timeout")
    import_page_limit: int = Field(
        default=50, ge=1, le=50, description="Maximum entries fetched per import"
    )

    # ============================================
    # Public URLs
    # ============================================
    public_base_url: str = Field(
        default="https://recursive.eco", description="Base URL of the public viewer"
    )
    channels_base_url: str = Field(
        default="https://channels.recursive.eco", description="Base URL of the channels site"
    )
    proxy_base: str = Field(
        default="/api/proxy-image", description="Same-origin image relay endpoint"
    )

    # ============================================
    # Sequence Limits
    # ============================================
    max_items: int = Field(default=50, ge=1, le=500, description="Maximum items per sequence")
    max_hashtags: int = Field(default=5, ge=0, le=20, description="Maximum hashtags per sequence")

    # ============================================
    # Draft Autosave
    # ============================================
    draft_path: str = Field(
        default="./.sequencer/drafts.json", description="Local draft storage file"
    )
    draft_key: str = Field(default="sequence-draft", description="Key of the single draft blob")
    draft_max_age_days: int = Field(
        default=30, ge=1, le=365, description="Drafts older than this are discarded on restore"
    )

    @field_validator("public_base_url", "channels_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended directly.

        Args:
            v: Base URL string

        Returns:
            URL without trailing slash
        """
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode.

        Returns:
            True if app_env is 'development'
        """
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if app_env is 'production'
        """
        return self.app_env == "production"


# =============================================================================
# Singleton accessor
# =============================================================================

_config: Config | None = None


def get_config() -> Config:
    """Get the global Config singleton.

    Returns:
        The global Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config
