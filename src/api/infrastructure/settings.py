"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Server configuration database connection settings.

    Environment variables:
        SERVERCONF_DB_HOST: Database host (default: localhost)
        SERVERCONF_DB_PORT: Database port (default: 5432)
        SERVERCONF_DB_DATABASE: Database name (default: serverconf)
        SERVERCONF_DB_USERNAME: Database user (default: serverconf)
        SERVERCONF_DB_PASSWORD: Database password (required in production)
        SERVERCONF_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        SERVERCONF_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        SERVERCONF_DB_LOCK_TIMEOUT_MS: Lock wait limit for mutations, 0 waits
            forever (default: 5000)
    """

    model_config = SettingsConfigDict(
        env_prefix="SERVERCONF_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="serverconf", description="Database name")
    username: str = Field(default="serverconf", description="Database username")
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
    lock_timeout_ms: int = Field(
        default=5000,
        description="Longest wait for a client row lock before the mutation fails",
        ge=0,
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


class GlobalConfSettings(BaseSettings):
    """Global configuration (directory snapshot) settings.

    Environment variables:
        SERVERCONF_GLOBALCONF_SNAPSHOT_PATH: Path of the JSON directory snapshot
            (default: /etc/xroad/globalconf/snapshot.json)
        SERVERCONF_GLOBALCONF_TIMEOUT_SECONDS: Upper bound for a single directory
            query (default: 5.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="SERVERCONF_GLOBALCONF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    snapshot_path: Path = Field(
        default=Path("/etc/xroad/globalconf/snapshot.json"),
        description="Path of the global configuration snapshot",
    )
    timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for a single directory query",
        gt=0,
        le=60,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="SERVERCONF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Security Server Admin API", description="Application name"
    )
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def globalconf(self) -> GlobalConfSettings:
        """Get global configuration settings."""
        return get_globalconf_settings()


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
def get_globalconf_settings() -> GlobalConfSettings:
    """Get cached global configuration settings."""
    return GlobalConfSettings()
