"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from orchestrator.configs.base import BaseSettings
from orchestrator.configs.database import DatabaseSettings
from orchestrator.configs.embedding import EmbeddingSettings
from orchestrator.configs.ingestion import IngestionSettings
from orchestrator.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once at first call.

    Returns:
        Settings: Application settings instance

    Usage:
        from orchestrator.configs import get_settings
        settings = get_settings()
    """
    return Settings()
