"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly,
in particular the OAuth client credentials for each connected provider.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        DIRSYNC_DB_HOST: Database host (default: localhost)
        DIRSYNC_DB_PORT: Database port (default: 5432)
        DIRSYNC_DB_DATABASE: Database name (default: dirsync)
        DIRSYNC_DB_USERNAME: Database user (default: dirsync)
        DIRSYNC_DB_PASSWORD: Database password (required in production)
        DIRSYNC_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        DIRSYNC_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRSYNC_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="dirsync", description="Database name")
    username: str = Field(default="dirsync", description="Database username")
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


class GoogleOAuthSettings(BaseSettings):
    """OAuth client settings for Google Workspace.

    Environment variables:
        DIRSYNC_GOOGLE_CLIENT_ID: OAuth client ID
        DIRSYNC_GOOGLE_CLIENT_SECRET: OAuth client secret
        DIRSYNC_GOOGLE_REDIRECT_URI: Callback URL registered with Google
            (default: {base_url}/api/google/callback)
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRSYNC_GOOGLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    client_id: str = Field(default="", description="Google OAuth client ID")
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Google OAuth client secret",
    )
    redirect_uri: str | None = Field(
        default=None,
        description="Override for the registered callback URL",
    )


class MicrosoftOAuthSettings(BaseSettings):
    """OAuth client settings for Microsoft Entra ID.

    Environment variables:
        DIRSYNC_MICROSOFT_CLIENT_ID: Application (client) ID
        DIRSYNC_MICROSOFT_CLIENT_SECRET: Client secret
        DIRSYNC_MICROSOFT_REDIRECT_URI: Callback URL registered in Entra ID
            (default: {base_url}/api/microsoft/callback)
        DIRSYNC_MICROSOFT_TENANT: Authority tenant segment (default: organizations)
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRSYNC_MICROSOFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    client_id: str = Field(default="", description="Entra ID application ID")
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Entra ID client secret",
    )
    redirect_uri: str | None = Field(
        default=None,
        description="Override for the registered callback URL",
    )
    tenant: str = Field(
        default="organizations",
        description="Tenant used in the login.microsoftonline.com authority",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections.

    Environment variables:
        DIRSYNC_APP_NAME: Application name
        DIRSYNC_DEBUG: Debug mode
        DIRSYNC_BASE_URL: Public base URL of this service, used to derive
            OAuth callback URLs (default: http://localhost:8000)
        DIRSYNC_LANDING_URL: Where OAuth callbacks redirect to (default: /)
        DIRSYNC_STATE_SIGNING_KEY: Optional HMAC key for the OAuth state
        DIRSYNC_HTTP_TIMEOUT_SECONDS: Outbound HTTP timeout (default: none)
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Dirsync API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    base_url: str = Field(
        default="http://localhost:8000",
        description="Public base URL of the service",
    )
    landing_url: str = Field(
        default="/",
        description="Landing page that OAuth callbacks redirect to",
    )
    state_signing_key: SecretStr | None = Field(
        default=None,
        description="HMAC key protecting the OAuth state envelope",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        description="Timeout for provider HTTP calls; unset means no timeout",
        gt=0,
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def google(self) -> GoogleOAuthSettings:
        """Get Google OAuth settings."""
        return get_google_settings()

    @property
    def microsoft(self) -> MicrosoftOAuthSettings:
        """Get Microsoft OAuth settings."""
        return get_microsoft_settings()


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
def get_google_settings() -> GoogleOAuthSettings:
    """Get cached Google OAuth settings."""
    return GoogleOAuthSettings()


@lru_cache
def get_microsoft_settings() -> MicrosoftOAuthSettings:
    """Get cached Microsoft OAuth settings."""
    return MicrosoftOAuthSettings()
