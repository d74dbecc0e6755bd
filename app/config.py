# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The admin identity and the cookie signing key have no defaults: the app
# refuses to start until ADMIN_EMAIL and SECRET_KEY are configured.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS, server-side only)"
    )

    SUPABASE_ANON_KEY: str | None = Field(
        default=None,
        description="Supabase anon/public API key"
    )

    # -------------------------------------------------------------------------
    # Google OAuth / Admin Identity
    # -------------------------------------------------------------------------

    GOOGLE_CLIENT_ID: str = Field(
        default="",
        description="Google OAuth client ID"
    )

    GOOGLE_CLIENT_SECRET: str = Field(
        default="",
        description="Google OAuth client secret"
    )

    ADMIN_EMAIL: str = Field(
        ...,
        min_length=3,
        description="The single Google account allowed into the admin dashboard"
    )

    # -------------------------------------------------------------------------
    # Site
    # -------------------------------------------------------------------------

    SITE_URL: str = Field(
        default="http://localhost:8000",
        description="Public base URL used in sitemaps and OAuth redirects"
    )

    CONTACT_EMAIL: str = Field(
        default="",
        description="Public address shown on the contact page (hidden when empty)"
    )

    PAGE_REVALIDATE_SECONDS: int = Field(
        default=3600,
        ge=0,
        description="How long a rendered page stays fresh in the page cache"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    SECRET_KEY: str = Field(
        ...,
        min_length=16,
        description="Secret key for signing the admin session cookie"
    )

    SESSION_MAX_AGE_DAYS: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Lifetime of the admin session cookie in days"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def site_url(self) -> str:
        """SITE_URL without a trailing slash."""
        return self.SITE_URL.rstrip("/")

    @property
    def session_max_age_seconds(self) -> int:
        return self.SESSION_MAX_AGE_DAYS * 24 * 60 * 60

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
