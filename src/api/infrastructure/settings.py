"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        SHIFTBOARD_DB_HOST: Database host (default: localhost)
        SHIFTBOARD_DB_PORT: Database port (default: 5432)
        SHIFTBOARD_DB_DATABASE: Database name (default: shiftboard)
        SHIFTBOARD_DB_USERNAME: Database user (default: shiftboard)
        SHIFTBOARD_DB_PASSWORD: Database password (required in production)
        SHIFTBOARD_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        SHIFTBOARD_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFTBOARD_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="shiftboard", description="Database name")
    username: str = Field(default="shiftboard", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Identity provider settings for access token validation.

    Tokens issued by the hosted auth backend are validated either with a
    shared HS256 secret or against the provider's JWKS document.

    Environment variables:
        SHIFTBOARD_AUTH_JWT_SECRET: Shared HS256 secret (takes precedence over JWKS)
        SHIFTBOARD_AUTH_JWKS_URL: JWKS URL for asymmetric token validation
        SHIFTBOARD_AUTH_ISSUER: Expected issuer claim (optional)
        SHIFTBOARD_AUTH_AUDIENCE: Expected audience claim (default: authenticated)
        SHIFTBOARD_AUTH_JWKS_CACHE_TTL_SECONDS: JWKS cache lifetime (default: 3600)
        SHIFTBOARD_AUTH_ACCESS_TOKEN_COOKIE: Cookie holding the access token
            when no Authorization header is sent (default: access_token)
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFTBOARD_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr | None = Field(
        default=None,
        description="Shared secret for HS256 access tokens",
    )
    jwks_url: str | None = Field(
        default=None,
        description="JWKS endpoint for RS256/ES256 access tokens",
    )
    issuer: str | None = Field(default=None, description="Expected issuer claim")
    audience: str = Field(
        default="authenticated",
        description="Expected audience claim",
    )
    jwks_cache_ttl_seconds: int = Field(
        default=3600,
        description="How long fetched JWKS keys are cached",
        ge=0,
    )
    access_token_cookie: str = Field(
        default="access_token",
        description="Cookie carrying the access token for browser requests",
    )

    @model_validator(mode="after")
    def validate_key_source(self) -> "AuthSettings":
        """Require one way of verifying token signatures."""
        if self.jwt_secret is None and not self.jwks_url:
            raise ValueError(
                "Either SHIFTBOARD_AUTH_JWT_SECRET or SHIFTBOARD_AUTH_JWKS_URL "
                "must be set"
            )
        return self


class TenancySettings(BaseSettings):
    """Multi-tenant context settings.

    Environment variables:
        SHIFTBOARD_TENANCY_PREFERENCE_COOKIE_NAME: Active-tenant cookie name
        SHIFTBOARD_TENANCY_PREFERENCE_SIGNING_SECRET: Secret for signing the cookie
        SHIFTBOARD_TENANCY_PREFERENCE_MAX_AGE_DAYS: Cookie lifetime (default: 30)
        SHIFTBOARD_TENANCY_PREFERENCE_COOKIE_SECURE: Set the Secure flag (default: true)
        SHIFTBOARD_TENANCY_MAX_TENANTS_PER_PRINCIPAL: Self-service creation cap (default: 5)
        SHIFTBOARD_TENANCY_SIGN_IN_PATH: Redirect target when not authenticated
        SHIFTBOARD_TENANCY_ONBOARDING_PATH: Redirect target when the user has no tenant
        SHIFTBOARD_TENANCY_INVALIDATION_CHANNEL: NOTIFY channel for invalidations
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFTBOARD_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    preference_cookie_name: str = Field(
        default="app-active-company-id",
        description="Name of the active-tenant preference cookie",
    )
    preference_signing_secret: SecretStr = Field(
        default=SecretStr("dev-only-change-me"),
        description="Secret used to sign the active-tenant preference",
    )
    preference_max_age_days: int = Field(
        default=30,
        description="Lifetime of the active-tenant preference",
        ge=1,
        le=365,
    )
    preference_cookie_secure: bool = Field(
        default=True,
        description="Whether the preference cookie is HTTPS-only",
    )
    max_tenants_per_principal: int = Field(
        default=5,
        description="Maximum tenants a principal may create or belong to via self-service",
        ge=1,
    )
    sign_in_path: str = Field(default="/auth/signin")
    onboarding_path: str = Field(default="/dashboard/create-company")
    invalidation_channel: str = Field(default="tenant_invalidations")

    @property
    def preference_max_age(self) -> timedelta:
        """Lifetime of a signed preference."""
        return timedelta(days=self.preference_max_age_days)

    @property
    def preference_max_age_seconds(self) -> int:
        """Cookie max-age in seconds."""
        return self.preference_max_age_days * 24 * 60 * 60


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="SHIFTBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Shiftboard API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get identity provider settings."""
        return get_auth_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached identity provider settings."""
    return AuthSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()
