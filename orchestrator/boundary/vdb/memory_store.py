"""
In-memory vector index.

Exact brute-force cosine similarity over all stored chunks. Suitable for
tests, small corpora and local development; contents are lost on restart.

Dependencies: numpy, orchestrator.boundary.vdb.vector_index
System role: Non-persistent vector store backend
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from orchestrator.boundary.vdb.vector_index import validate_batch, validate_top_k
from orchestrator.core.exceptions import InvalidInputError
from orchestrator.core.paths import normalize_path
from orchestrator.models.chunk import Chunk, ScoredChunk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    sequence: int
    chunk: Chunk
    vector: np.ndarray
    norm: float


class InMemoryVectorIndex:
    """
    Vector index held in process memory.

    Entries are keyed by chunk id. Re-upserting an id replaces the entry
    and counts as a new insertion for tie-breaking.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._sequence = itertools.count()

    async def upsert_many(self, chunks: Sequence[Chunk]) -> None:
        """
        Store chunks with their embeddings.

        Args:
            chunks: Embedded chunks

        Raises:
            InvalidInputError: Any chunk lacks a vector, or dimensions disagree
                with each other or with already stored vectors (nothing stored)
        """
        dimension = validate_batch(chunks)
        if dimension is None:
            return

        stored_dimension = self._dimension()
        if stored_dimension is not None and dimension != stored_dimension:
            raise InvalidInputError(
                "Vector dimension does not match the index",
                field="vector",
                details={"expected": stored_dimension, "actual": dimension},
            )

        for chunk in chunks:
            vector = np.asarray(chunk.vector, dtype=np.float64)
            self._entries.pop(chunk.id, None)
            self._entries[chunk.id] = _Entry(
                sequence=next(self._sequence),
                chunk=chunk.model_copy(update={"source_file": normalize_path(chunk.source_file)}),
                vector=vector,
                norm=float(np.linalg.norm(vector)),
            )

        logger.info(f"{__name__}:upsert_many - Stored {len(chunks)} chunks in vector store")

    async def delete_by_source(self, source_file: str) -> int:
        """
        Remove all chunks of a source file, whatever their fingerprint.

        Returns:
            int: Number of chunks removed (0 if none)
        """
        source_file = normalize_path(source_file)
        doomed = [
            chunk_id
            for chunk_id, entry in self._entries.items()
            if entry.chunk.source_file == source_file
        ]
        for chunk_id in doomed:
            del self._entries[chunk_id]

        if doomed:
            logger.info(
                f"{__name__}:delete_by_source - Removed {len(doomed)} chunks",
                extra={"source_file": source_file},
            )
        return len(doomed)

    async def search(self, query_vector: Sequence[float], top_k: int) -> list[ScoredChunk]:
        """
        Rank all stored chunks by cosine similarity to the query.

        Args:
            query_vector: Query embedding
            top_k: Maximum number of results (>= 1)

        Returns:
            list[ScoredChunk]: Best first; ties keep insertion order

        Raises:
            InvalidInputError: top_k < 1 or query dimension mismatch
        """
        validate_top_k(top_k)
        if not self._entries:
            return []

        query = np.asarray(query_vector, dtype=np.float64)
        entries = list(self._entries.values())
        if query.shape[0] != entries[0].vector.shape[0]:
            raise InvalidInputError(
                "Vectors must have same dimension",
                field="query_vector",
                details={"expected": entries[0].vector.shape[0], "actual": query.shape[0]},
            )

        matrix = np.vstack([entry.vector for entry in entries])
        norms = np.array([entry.norm for entry in entries]) * float(np.linalg.norm(query))
        dots = matrix @ query
        scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0.0)

        sequences = np.array([entry.sequence for entry in entries])
        order = np.lexsort((sequences, -scores))[:top_k]

        return [
            ScoredChunk(
                chunk=entries[i].chunk.model_copy(update={"vector": None}),
                score=float(scores[i]),
            )
            for i in order
        ]

    async def size(self) -> int:
        """Exact number of stored chunks."""
        return len(self._entries)

    async def close(self) -> None:
        """Nothing to release."""
        return None

    def _dimension(self) -> int | None:
        for entry in self._entries.values():
            return entry.vector.shape[0]
        return None
