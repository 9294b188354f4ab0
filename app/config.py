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
# Fee rates and flat fees live here so they can be changed per deployment
# without a code change. Dict-valued settings are read as JSON, e.g.
#   CURRENCY_FIXED_FEES='{"TZS": "500", "USD": "0.30"}'
# =============================================================================

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,  # ... means required (no default)
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret used to verify Supabase access tokens"
    )

    # -------------------------------------------------------------------------
    # Platform Fees
    # -------------------------------------------------------------------------
    # Rates are fractions (0.08 == 8%). Every value can be overridden
    # through the environment.

    MARKETPLACE_FEE_RATE: Decimal = Field(default=Decimal("0.08"), ge=0, le=1)
    DIGITAL_PRODUCT_FEE_RATE: Decimal = Field(default=Decimal("0.06"), ge=0, le=1)
    SERVICE_BOOKING_FEE_RATE: Decimal = Field(default=Decimal("0.10"), ge=0, le=1)
    COMMISSION_WORK_FEE_RATE: Decimal = Field(default=Decimal("0.12"), ge=0, le=1)
    SUBSCRIPTION_FEE_RATE: Decimal = Field(default=Decimal("0.05"), ge=0, le=1)
    TIP_FEE_RATE: Decimal = Field(default=Decimal("0.03"), ge=0, le=1)

    PAYMENT_PROCESSING_RATE: Decimal = Field(
        default=Decimal("0.025"),
        ge=0,
        le=1,
        description="Percentage part of the payment processor's fee"
    )

    PAYMENT_PROCESSING_FIXED_FEE: Decimal = Field(
        default=Decimal("500"),
        ge=0,
        description="Flat processing fee for currencies missing from CURRENCY_FIXED_FEES"
    )

    CURRENCY_FIXED_FEES: dict[str, Decimal] = Field(
        default={
            "TZS": Decimal("500"),
            "KES": Decimal("20"),
            "UGX": Decimal("500"),
            "RWF": Decimal("400"),
            "USD": Decimal("0.20"),
            "EUR": Decimal("0.18"),
            "GBP": Decimal("0.15"),
        },
        description="Flat processing fee per ISO currency code"
    )

    PERCENTAGE_TIER_FEE_RATES: dict[str, dict[str, Decimal]] = Field(
        default={
            "basic": {
                "marketplace": Decimal("0.08"),
                "digital_product": Decimal("0.06"),
                "service_booking": Decimal("0.10"),
                "commission_work": Decimal("0.12"),
            },
            "premium": {
                "marketplace": Decimal("0.05"),
                "digital_product": Decimal("0.06"),
                "service_booking": Decimal("0.08"),
                "commission_work": Decimal("0.10"),
            },
            "pro": {
                "marketplace": Decimal("0.03"),
                "digital_product": Decimal("0.04"),
                "service_booking": Decimal("0.06"),
                "commission_work": Decimal("0.08"),
            },
        },
        description="Commission overrides for users on percentage-based pricing"
    )

    FEE_ABSORPTION: Literal["creator", "buyer"] = Field(
        default="creator",
        description=(
            "Who pays the processing fee: 'creator' deducts it from the payout, "
            "'buyer' adds it on top of the price"
        )
    )

    DEFAULT_CURRENCY: str = Field(
        default="TZS",
        min_length=3,
        max_length=3,
        description="Currency used when a request doesn't name one"
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

    APP_URL: str = Field(
        default="https://www.blinno.app",
        description="Public URL of the web app"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (useful for production where
        # env vars are set directly)
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:5173, https://www.blinno.app" -> ["http://localhost:5173", "https://www.blinno.app"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

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

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
