"""
Database configuration settings.

Manages the SQLAlchemy connection for the source ledger and chunk metadata.
Defaults to a local SQLite file; PostgreSQL is selected by URL.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from orchestrator.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+aiosqlite:///./data/orchestrator.db",
        description="SQLAlchemy async database URL",
    )
    pool_size: int = Field(default=10, description="Connection pool size (server databases only)")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def is_sqlite(self) -> bool:
        """
        Check whether the configured URL targets SQLite.

        Returns:
            bool: True for sqlite URLs (no connection pool sizing applies)
        """
        return self.url.startswith("sqlite")

    @property
    def async_database_url(self) -> str:
        """
        Construct async connection URL.

        Returns:
            str: URL with an async driver (postgres URLs are mapped to asyncpg)
        """
        if self.url.startswith("postgres://"):
            return self.url.replace("postgres://", "postgresql+asyncpg://", 1)
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.url
