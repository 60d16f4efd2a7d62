"""
Google Generative AI embeddings pinned to one output dimension.

LangChainEmbeddingPort embeds one text at a time through aembed_query, so
that is the call this wrapper pins. Without it the model's default size
would reach the vector index and clash with vectors already stored.

Dependencies: langchain_google_genai, python-dotenv
System role: Production embedding model
"""

import logging
from typing import List

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)
load_dotenv()


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings whose async query calls use a fixed dimension."""

    _output_dimensionality: int = 768

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 768,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings.

        Args:
            model: Google embedding model ID
            output_dimensionality: Vector size requested on every query
            **kwargs: Passed to GoogleGenerativeAIEmbeddings (api key, task type)
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Embedding model {model} pinned to {output_dimensionality} dimensions"
        )

    async def aembed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        dim = output_dimensionality or self._output_dimensionality
        return await super().aembed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=dim,
        )
