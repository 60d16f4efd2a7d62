"""
Vector store factory for selecting between the in-memory and FAISS backends.

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: orchestrator.boundary.vdb, orchestrator.configs
System role: Vector store instantiation and selection
"""

import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from orchestrator.boundary.vdb.faiss_store import FAISSVectorIndex
from orchestrator.boundary.vdb.memory_store import InMemoryVectorIndex
from orchestrator.boundary.vdb.vector_index import VectorIndex
from orchestrator.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def get_vector_index(
    settings: VectorStoreSettings,
    session_factory: async_sessionmaker,
) -> VectorIndex:
    """
    Factory function to get vector index based on configuration.

    Args:
        settings: Vector store settings
        session_factory: Session factory for the FAISS chunk table

    Returns:
        InMemoryVectorIndex or FAISSVectorIndex: Configured vector index

    Raises:
        ValueError: If store_type is invalid
    """
    store_type = settings.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_index - Creating in-memory vector index")
        return InMemoryVectorIndex()

    elif store_type == "faiss":
        logger.info(
            f"{__name__}:get_vector_index - Creating FAISS HNSW vector index at {settings.index_dir}"
        )
        return FAISSVectorIndex(
            session_factory=session_factory,
            index_dir=settings.index_dir,
            index_name=settings.index_name,
            hnsw_m=settings.hnsw_m,
            ef_construction=settings.ef_construction,
            ef_search=settings.ef_search,
            compact_ratio=settings.compact_ratio,
        )

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. Must be 'memory' or 'faiss'."
        )
