from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder host the storefront ships with before Supabase is provisioned
SUPABASE_PLACEHOLDER_URL = "https://placeholder.supabase.co"


class Settings(BaseSettings):
    """Global application settings."""

    # Application
    ENVIRONMENT: Literal["local", "development", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # Supabase
    # Leaving SUPABASE_URL unset keeps the storefront usable without a backend
    # auth service: the auth store degrades to local-only state.
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: str = "placeholder-anon-key"
    SUPABASE_SERVICE_ROLE_KEY: str = "placeholder-service-key"
    SUPABASE_JWT_SECRET: str = "test-jwt-secret"
    AUTH_COOKIE_NAME: str = "sb-access-token"

    # Store pricing
    STORE_CURRENCY: str = "USD"
    TAX_RATE: Decimal = Decimal("0.18")
    FREE_SHIPPING_THRESHOLD: Decimal = Decimal("70")
    FLAT_SHIPPING_FEE: Decimal = Decimal("5")
    ORDER_NUMBER_PREFIX: str = "AYU"

    # Catalog pagination
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    # Client-side durable state
    STATE_DIR: str = ".storefront-state"
    CART_STORAGE_KEY: str = "ayurveda-cart-storage"
    WISHLIST_STORAGE_KEY: str = "ayurveda-wishlist"
    AUTH_STORAGE_KEY: str = "ayurveda-auth-session"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str]) -> str:
        if isinstance(v, str):
            if v.startswith("postgresql://"):
                return v.replace("postgresql://", "postgresql+psycopg://", 1)
        return v

    @property
    def supabase_configured(self) -> bool:
        """True when a real Supabase project URL has been provided."""
        return bool(self.SUPABASE_URL) and self.SUPABASE_URL != SUPABASE_PLACEHOLDER_URL


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return Settings()
