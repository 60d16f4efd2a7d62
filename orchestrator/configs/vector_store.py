"""
Vector store configuration settings.

Selects the vector index backend and tunes the persistent HNSW index.

Dependencies: pydantic, pydantic_settings
System role: Vector index configuration for retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory scan or persistent FAISS HNSW)."""

    store_type: str = Field(
        default="faiss",
        description="Vector store type: 'memory' for linear scan, 'faiss' for persistent HNSW",
    )
    index_dir: str = Field(
        default="./data/faiss_index",
        description="Directory holding the persisted FAISS index file",
    )
    index_name: str = Field(default="chunks", description="FAISS index file stem")

    hnsw_m: int = Field(default=32, description="HNSW graph neighbours per node")
    ef_construction: int = Field(default=200, description="HNSW build-time candidate list size")
    ef_search: int = Field(default=64, description="HNSW query-time candidate list size")
    compact_ratio: float = Field(
        default=0.3,
        description="Rebuild the HNSW graph once tombstoned vectors exceed this share",
        ge=0.0,
        le=1.0,
    )

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
