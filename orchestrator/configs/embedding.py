"""
Embedding provider configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Embedding model configuration for indexing and queries
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Settings for the embedding boundary."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="google",
        description="Embedding provider: 'google' (Gemini) or 'fake' (deterministic, offline)",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Google embedding model ID",
    )
    dimension: int = Field(
        default=768,
        description="Output dimension requested from the embedding model",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single embedding call",
        gt=0,
    )
