"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.

Only the cached getters at the bottom of this module read the process
environment. Components receive the resulting settings objects.
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    The same host and credentials serve every tenant database; the
    initialization consumer only swaps the database name.

    Environment variables:
        CLIENTS_DB_HOST: Database host (default: localhost)
        CLIENTS_DB_PORT: Database port (default: 5432)
        CLIENTS_DB_DATABASE: Database name (default: client_management)
        CLIENTS_DB_USERNAME: Database user (default: client_management)
        CLIENTS_DB_PASSWORD: Database password (required in production)
        CLIENTS_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        CLIENTS_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        CLIENTS_DB_ECHO: Log SQL statements (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIENTS_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="client_management", description="Database name")
    username: str = Field(
        default="client_management", description="Database username"
    )
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
    echo: bool = Field(default=False, description="Log SQL statements")

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

    def for_database(self, database: str) -> "DatabaseSettings":
        """Return a copy of these settings pointing at another database."""
        return self.model_copy(update={"database": database})


class MessageBusSettings(BaseSettings):
    """Redis Streams message bus settings.

    Environment variables:
        CLIENTS_BUS_ENABLED: Publish to and consume from Redis (default: true)
        CLIENTS_BUS_REDIS_URL: Redis connection URL
        CLIENTS_BUS_STREAM_PREFIX: Prefix for every stream name
        CLIENTS_BUS_CONSUMER_GROUP: Consumer group for inbound commands
        CLIENTS_BUS_CONSUMER_NAME: Consumer name within the group
        CLIENTS_BUS_BATCH_SIZE: Messages read per XREADGROUP call
        CLIENTS_BUS_BLOCK_MS: How long XREADGROUP blocks waiting for messages
        CLIENTS_BUS_CLAIM_IDLE_MS: Idle time before a pending message is reclaimed
        CLIENTS_BUS_MAX_DELIVERIES: Deliveries before a message is dead-lettered
        CLIENTS_BUS_STREAM_MAXLEN: Approximate cap on outbound stream length
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIENTS_BUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Use the Redis message bus")
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    stream_prefix: str = Field(
        default="client-management",
        description="Prefix for stream names",
    )
    consumer_group: str = Field(
        default="client-management-service",
        description="Consumer group for inbound commands",
    )
    consumer_name: str = Field(
        default="client-management-1",
        description="Consumer name within the group",
    )
    batch_size: int = Field(default=10, ge=1, le=1000)
    block_ms: int = Field(default=5000, ge=0)
    claim_idle_ms: int = Field(default=60000, ge=1000)
    max_deliveries: int = Field(default=5, ge=1)
    stream_maxlen: int = Field(default=100000, ge=1)

    def stream_name(self, message_type: str) -> str:
        """Stream carrying messages of the given type."""
        return f"{self.stream_prefix}.{message_type}"


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections.

    Environment variables:
        CLIENTS_APP_NAME: Application name
        CLIENTS_ENVIRONMENT: development or production (default: development)
        CLIENTS_DEFAULT_TENANT_ID: Tenant used when none is supplied in development
        CLIENTS_DEFAULT_ACTOR: Actor used when none is supplied in development
        CLIENTS_CORS_ORIGINS: JSON list of allowed browser origins (default: [])
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Client Management API", description="Application name"
    )
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment",
    )
    default_tenant_id: str = Field(
        default="default-tenant",
        description="Fallback tenant in development",
    )
    default_actor: str = Field(
        default="dev-user",
        description="Fallback actor in development",
    )
    cors_origins: list[str] = Field(
        default_factory=list,
        description="Allowed CORS origins",
    )

    @property
    def is_development(self) -> bool:
        """Development enables default tenant/actor fallbacks and API docs."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def message_bus(self) -> MessageBusSettings:
        """Get message bus settings."""
        return get_message_bus_settings()


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
def get_message_bus_settings() -> MessageBusSettings:
    """Get cached message bus settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return MessageBusSettings()
