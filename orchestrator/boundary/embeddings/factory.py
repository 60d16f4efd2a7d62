"""
Embedding port factory.

Dependencies: langchain_core, langchain_google_genai
System role: Embedding provider selection
"""

import logging

from langchain_core.embeddings import DeterministicFakeEmbedding

from orchestrator.boundary.embeddings.embedding_port import EmbeddingPort, LangChainEmbeddingPort
from orchestrator.boundary.embeddings.gemini import FixedDimensionEmbeddings
from orchestrator.configs.embedding import EmbeddingSettings

logger = logging.getLogger(__name__)


def get_embedding_port(settings: EmbeddingSettings) -> EmbeddingPort:
    """
    Build the embedding port for the configured provider.

    Args:
        settings: Embedding settings

    Returns:
        EmbeddingPort: Adapter around the selected LangChain model

    Raises:
        ValueError: If provider is invalid
    """
    provider = settings.provider.lower()

    if provider == "google":
        logger.info(f"{__name__}:get_embedding_port - Using Google embeddings ({settings.model})")
        return LangChainEmbeddingPort(
            FixedDimensionEmbeddings(
                model=settings.model,
                output_dimensionality=settings.dimension,
            )
        )

    elif provider == "fake":
        logger.info(
            f"{__name__}:get_embedding_port - Using deterministic fake embeddings "
            f"(dimension={settings.dimension})"
        )
        return LangChainEmbeddingPort(DeterministicFakeEmbedding(size=settings.dimension))

    else:
        raise ValueError(f"Invalid EMBEDDING_PROVIDER: {provider}. Must be 'google' or 'fake'.")
