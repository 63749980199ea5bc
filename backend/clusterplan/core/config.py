"""Application configuration loaded from environment variables.

All configuration is via environment variables (or a local .env file).
No hardcoded URLs, ports, or credentials.
"""

from functools import lru_cache

from pydantic import Field, PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Content Cluster Planner")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # Server
    port: int = Field(default=8000, description="Port to bind to")
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    frontend_url: str | None = Field(
        default=None,
        description="Dashboard origin allowed by CORS (all origins when unset)",
    )

    # Database
    database_url: PostgresDsn = Field(
        ...,
        description="PostgreSQL connection string",
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size")
    db_max_overflow: int = Field(default=10, description="Max overflow connections")
    db_pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    db_slow_query_threshold_ms: int = Field(
        default=100, description="Threshold for slow query warnings (ms)"
    )
    db_connect_timeout: int = Field(
        default=60, description="Connection timeout in seconds"
    )
    db_command_timeout: int = Field(
        default=60, description="Command timeout in seconds"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format: json or text")

    # Authentication
    auth_required: bool = Field(
        default=True,
        description="Validate bearer sessions; when false a dev user is used",
    )

    # Content planning
    default_max_keywords_per_cluster: int = Field(
        default=25,
        ge=1,
        description="Keyword cap applied when a request does not set one",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
