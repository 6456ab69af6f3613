"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.supabase_url)
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    @property
    def supabase_mode(self) -> str:
        """Label of the key in use, shown in store error messages."""
        return "service_role" if self.supabase_service_role_key else "anon"

    # -------------------------------------------------------------------------
    # Telegram Bot
    # -------------------------------------------------------------------------
    telegram_bot_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("telegram_bot_token", "bot_token"),
        description="Telegram bot token used for sendMessage",
    )
    telegram_api_base: str = Field(
        default="https://api.telegram.org",
        description="Base URL of the Telegram Bot API",
    )
    telegram_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single Bot API request",
    )
    webapp_url: Optional[str] = Field(
        default=None,
        description="Deep link into the web client, attached to every message",
    )
    remind_secret: Optional[str] = Field(
        default=None,
        description="Shared secret required by the reminder endpoint",
    )

    # -------------------------------------------------------------------------
    # Programs and Progression
    # -------------------------------------------------------------------------
    built_in_program_name: str = Field(
        default="100 days v.2",
        description="Name of the shared built-in program",
    )
    program_days: int = Field(
        default=100,
        ge=1,
        description="Number of days created for a custom program",
    )
    reset_confirmation_code: str = Field(
        default="0000",
        description="Code the user types to confirm a progress reset",
    )
    step_exercise_name: str = Field(
        default="шаги",
        description="Reserved exercise name counted as steps in statistics",
    )
    recent_window_size: int = Field(default=7, ge=1)
    history_limit: int = Field(default=500, ge=1)
    breakdown_limit: int = Field(default=10000, ge=1)

    # -------------------------------------------------------------------------
    # Identity bootstrap (CLI client)
    # -------------------------------------------------------------------------
    identity_max_attempts: int = Field(
        default=20,
        ge=1,
        description="Polls of the platform identity before falling back",
    )
    identity_retry_wait_seconds: float = Field(
        default=0.15,
        ge=0,
        description="Delay between platform identity polls",
    )
    identity_file: str = Field(
        default="~/.fitstreak/identity.json",
        description="Where the generated local identifier is persisted",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated list of extra CORS origins",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"

    @property
    def telegram_configured(self) -> bool:
        """Both the bot token and the deep link are needed to send messages."""
        return bool(self.telegram_bot_token and self.webapp_url)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
