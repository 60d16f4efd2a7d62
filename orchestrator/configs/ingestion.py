"""
Ingestion configuration settings.

Controls the document corpus location, chunking budget and the
incremental indexing pass.

Dependencies: pydantic, pydantic_settings
System role: Indexer configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Settings for document ingestion."""

    model_config = SettingsConfigDict(
        env_prefix="INGESTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Run ingestion at startup (disable for tests)",
    )
    incremental: bool = Field(
        default=True,
        description="Skip files whose content hash is unchanged since the last pass",
    )
    docs_path: str = Field(default="./docs", description="Corpus root directory")
    max_tokens: int = Field(
        default=512,
        description="Token budget per chunk (estimated as characters / 4)",
        ge=1,
    )
    supported_extensions: list[str] = Field(
        default=[".md", ".txt", ".adoc"],
        description="File extensions picked up during discovery",
    )
    max_workers: int = Field(
        default=4,
        description="Files processed concurrently within one pass",
        ge=1,
    )
    fail_on_error: bool = Field(
        default=True,
        description="Abort startup when the startup pass hits a storage failure",
    )
    rescan_interval_seconds: float | None = Field(
        default=None,
        description="Re-run ingestion on this interval (None disables scheduling)",
    )
