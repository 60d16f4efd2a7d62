"""
Vector index contract.

Both backends (in-memory scan and persistent FAISS HNSW) satisfy this
protocol, so the indexer and retriever never know which one is active.

Dependencies: numpy, orchestrator.models
System role: Vector storage and similarity search abstraction
"""

from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from orchestrator.core.exceptions import InvalidInputError
from orchestrator.models.chunk import Chunk, ScoredChunk


@runtime_checkable
class VectorIndex(Protocol):
    """Capability set shared by all vector index backends."""

    async def upsert_many(self, chunks: Sequence[Chunk]) -> None:
        """Store chunks; the whole batch is rejected if any chunk lacks a vector."""
        ...

    async def delete_by_source(self, source_file: str) -> int:
        """Remove every chunk of a source and return how many were removed."""
        ...

    async def search(self, query_vector: Sequence[float], top_k: int) -> list[ScoredChunk]:
        """Return up to top_k chunks, most similar first."""
        ...

    async def size(self) -> int:
        """Number of stored chunks."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...


def validate_batch(chunks: Sequence[Chunk]) -> int | None:
    """
    Validate an upsert batch before anything is stored.

    Args:
        chunks: Chunks to upsert

    Returns:
        int | None: Common vector dimension, None for an empty batch

    Raises:
        InvalidInputError: A chunk has no vector or dimensions disagree
    """
    missing = [chunk.id for chunk in chunks if not chunk.has_vector]
    if missing:
        raise InvalidInputError(
            "Cannot store chunks without embeddings",
            field="vector",
            details={"chunk_ids": missing[:10], "missing_count": len(missing)},
        )

    ids = [chunk.id for chunk in chunks]
    if len(set(ids)) != len(ids):
        raise InvalidInputError("Chunk ids must be unique within a batch", field="id")

    dimensions = {len(chunk.vector) for chunk in chunks}
    if len(dimensions) > 1:
        raise InvalidInputError(
            "Chunks in one batch must share a vector dimension",
            field="vector",
            details={"dimensions": sorted(dimensions)},
        )
    return dimensions.pop() if dimensions else None


def validate_top_k(top_k: int) -> None:
    """Raise InvalidInputError unless top_k >= 1."""
    if top_k < 1:
        raise InvalidInputError("top_k must be at least 1", field="top_k", details={"top_k": top_k})


def normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """
    L2-normalize each row, leaving zero-magnitude rows as zeros.

    Inner products of normalized rows are cosine similarities, and a zero
    vector scores 0.0 against everything instead of producing NaN.
    """
    vectors = np.asarray(vectors, dtype=np.float32)
    if vectors.ndim == 1:
        vectors = vectors.reshape(1, -1)
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    safe = np.where(norms == 0.0, 1.0, norms)
    return np.where(norms == 0.0, 0.0, vectors / safe).astype(np.float32)
