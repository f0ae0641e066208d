"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared_kernel.locale import Locale

ONE_YEAR_SECONDS = 365 * 24 * 60 * 60


class StorefrontSettings(BaseSettings):
    """Main application settings.

    Environment variables:
        STOREFRONT_APP_NAME: Application name (default: StoreFront)
        STOREFRONT_ENVIRONMENT: development, production or test (default: development)
        STOREFRONT_DEBUG: Debug mode (default: false)
        STOREFRONT_DEFAULT_LOCALE: Locale used when none was negotiated (default: en)
        STOREFRONT_DETECTION_FALLBACK_LOCALE: Locale stored when Accept-Language
            matches no supported locale (default: ar)
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="StoreFront", description="Application name")
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(default=False, description="Debug mode")
    default_locale: Locale = Field(
        default=Locale.ENGLISH,
        description="Locale used for API calls when no locale was negotiated",
    )
    detection_fallback_locale: Locale = Field(
        default=Locale.ARABIC,
        description="Locale stored when the browser prefers no supported locale",
    )

    @property
    def is_development(self) -> bool:
        """Whether the application runs in development mode."""
        return self.environment == "development"


class CommerceApiSettings(BaseSettings):
    """Upstream commerce API client settings.

    Environment variables:
        STOREFRONT_API_BASE_URL: Base URL of the commerce API
        STOREFRONT_API_TIMEOUT: Request timeout in seconds (default: 30)
        STOREFRONT_API_ENABLE_LOGGING: Log every outbound request (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:3000/v1",
        description="Base URL of the commerce API",
    )
    timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
        gt=0,
        le=300,
    )
    enable_logging: bool = Field(
        default=False,
        description="Log every outbound commerce API request",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Endpoints are appended with a leading slash."""
        return value.rstrip("/")


class TenancySettings(BaseSettings):
    """Tenant resolution settings.

    Environment variables:
        STOREFRONT_TENANCY_RESERVED_LABELS: JSON list of subdomain labels that
            never name a store (default: ["www", "api", "admin", "app"])
        STOREFRONT_TENANCY_LOCAL_SUFFIXES: JSON list of development host
            suffixes where "<store>.<suffix>" names a store (default: ["localhost"])
        STOREFRONT_TENANCY_STORE_LOOKUP_TIMEOUT: Bounded wait for the store
            lookup in seconds (default: 10)
        STOREFRONT_TENANCY_SECONDARY_TIMEOUT: Bounded wait for optional page
            sections in seconds (default: 5)
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    reserved_labels: list[str] = Field(
        default_factory=lambda: ["www", "api", "admin", "app"],
        description="Subdomain labels that are never tenant-scoped",
    )
    local_suffixes: list[str] = Field(
        default_factory=lambda: ["localhost"],
        description="Development host suffixes",
    )
    store_lookup_timeout: float = Field(
        default=10.0,
        description="Bounded wait for store lookup in seconds",
        gt=0,
        le=60,
    )
    secondary_timeout: float = Field(
        default=5.0,
        description="Bounded wait for optional page sections in seconds",
        gt=0,
        le=60,
    )

    @field_validator("reserved_labels", "local_suffixes")
    @classmethod
    def normalize_labels(cls, value: list[str]) -> list[str]:
        """Labels are compared against lower-cased hostnames."""
        return [label.strip().lower() for label in value if label.strip()]

    @model_validator(mode="after")
    def validate_timeouts(self) -> "TenancySettings":
        """Validate secondary_timeout <= store_lookup_timeout."""
        if self.secondary_timeout > self.store_lookup_timeout:
            raise ValueError(
                f"secondary_timeout ({self.secondary_timeout}) must be <= "
                f"store_lookup_timeout ({self.store_lookup_timeout})"
            )
        return self


class CookieSettings(BaseSettings):
    """Names and lifetimes of the cookies the storefront reads and writes.

    Environment variables:
        STOREFRONT_COOKIE_STORE_ID_NAME (default: sf_store_id)
        STOREFRONT_COOKIE_STORE_ID_MAX_AGE: seconds (default: one year)
        STOREFRONT_COOKIE_VISITOR_ID_NAME (default: sf_visitor_id)
        STOREFRONT_COOKIE_VISITOR_ID_MAX_AGE: seconds (default: two years)
        STOREFRONT_COOKIE_LOCALE_NAME (default: sf_locale)
        STOREFRONT_COOKIE_LOCALE_MAX_AGE: seconds (default: one year)
        STOREFRONT_COOKIE_SAME_SITE (default: lax)
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_COOKIE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    store_id_name: str = Field(default="sf_store_id")
    store_id_max_age: int = Field(default=ONE_YEAR_SECONDS, gt=0)
    visitor_id_name: str = Field(default="sf_visitor_id")
    visitor_id_max_age: int = Field(default=2 * ONE_YEAR_SECONDS, gt=0)
    locale_name: str = Field(default="sf_locale")
    locale_max_age: int = Field(default=ONE_YEAR_SECONDS, gt=0)
    same_site: Literal["lax", "strict", "none"] = Field(default="lax")


@lru_cache
def get_settings() -> StorefrontSettings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return StorefrontSettings()


@lru_cache
def get_commerce_api_settings() -> CommerceApiSettings:
    """Get cached commerce API settings."""
    return CommerceApiSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()


@lru_cache
def get_cookie_settings() -> CookieSettings:
    """Get cached cookie settings."""
    return CookieSettings()
