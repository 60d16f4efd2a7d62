"""
Embedding port.

The indexer and retriever only see EmbeddingPort.embed(text). The
LangChain adapter turns any langchain_core Embeddings model into a port and
folds provider failures into EmbeddingUnavailableError.

Dependencies: langchain_core
System role: Text to vector boundary
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from langchain_core.embeddings import Embeddings

from orchestrator.core.exceptions import EmbeddingUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class EmbeddingPort(Protocol):
    """Produces one fixed-dimension vector per text."""

    async def embed(self, text: str) -> list[float]:
        """
        Embed a text.

        Raises:
            EmbeddingUnavailableError: Provider failure (rate limit, network, auth)
        """
        ...


class LangChainEmbeddingPort:
    """EmbeddingPort backed by a LangChain Embeddings model."""

    def __init__(self, embeddings: Embeddings) -> None:
        """
        Initialize adapter.

        Args:
            embeddings: Any langchain_core Embeddings implementation
        """
        self._embeddings = embeddings

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text through the wrapped model.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingUnavailableError: Any provider-side failure
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:embed - {type(e).__name__}: {e}")
            raise EmbeddingUnavailableError(
                message="Embedding provider unavailable",
                details={"provider": type(self._embeddings).__name__, "error": str(e)},
            ) from e
        return [float(value) for value in vector]


async def embed_with_timeout(port: EmbeddingPort, text: str, timeout: float) -> list[float]:
    """
    Embed with an upper bound on latency.

    Args:
        port: Embedding port
        text: Text to embed
        timeout: Seconds before the call is abandoned

    Returns:
        list[float]: Embedding vector

    Raises:
        EmbeddingUnavailableError: Provider failure or timeout
    """
    try:
        return await asyncio.wait_for(port.embed(text), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"{__name__}:embed_with_timeout - Embedding timed out after {timeout}s")
        raise EmbeddingUnavailableError(
            message="Embedding call timed out",
            details={"timeout_seconds": timeout},
        ) from e
