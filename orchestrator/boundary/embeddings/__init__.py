"""
Embedding boundary layer.

Dependencies: langchain_core, langchain_google_genai
System role: Text to vector adapters
"""

from orchestrator.boundary.embeddings.embedding_port import (
    EmbeddingPort,
    LangChainEmbeddingPort,
    embed_with_timeout,
)
from orchestrator.boundary.embeddings.factory import get_embedding_port

__all__ = [
    "EmbeddingPort",
    "LangChainEmbeddingPort",
    "embed_with_timeout",
    "get_embedding_port",
]
