"""
Context retriever.

Embeds a question and returns the most similar stored chunks.

Dependencies: orchestrator.boundary.vdb, orchestrator.boundary.embeddings
System role: Query path
"""

import logging
import time

from orchestrator.boundary.embeddings.embedding_port import EmbeddingPort, embed_with_timeout
from orchestrator.boundary.vdb.vector_index import VectorIndex
from orchestrator.models.query import QueryResponse, QueryResult

logger = logging.getLogger(__name__)


class Retriever:
    """Similarity search over the vector index."""

    def __init__(
        self,
        vector_index: VectorIndex,
        embedder: EmbeddingPort,
        embedding_timeout: float = 30.0,
    ) -> None:
        """
        Initialize retriever.

        Args:
            vector_index: Vector index backend
            embedder: Embedding port used for questions
            embedding_timeout: Seconds allowed for the question embedding
        """
        self._index = vector_index
        self._embedder = embedder
        self._embedding_timeout = embedding_timeout

    async def query(self, question: str, max_results: int = 5) -> QueryResponse:
        """
        Find the chunks most relevant to a question.

        Args:
            question: Natural language question
            max_results: Maximum number of chunks to return

        Returns:
            QueryResponse: Results best first, index size and elapsed time

        Raises:
            EmbeddingUnavailableError: Question could not be embedded
            InvalidInputError: max_results < 1 or dimension mismatch
            StorageUnavailableError: Vector index failure
        """
        started = time.perf_counter()

        vector = await embed_with_timeout(self._embedder, question, self._embedding_timeout)
        hits = await self._index.search(vector, max_results)
        total_chunks = await self._index.size()

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{__name__}:query - Returned {len(hits)} chunks in {elapsed_ms:.1f}ms",
            extra={"max_results": max_results, "total_chunks": total_chunks},
        )
        return QueryResponse(
            results=[QueryResult.from_scored(hit) for hit in hits],
            total_chunks=total_chunks,
            elapsed_ms=elapsed_ms,
        )
