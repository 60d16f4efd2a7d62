"""
Chunk domain models.

Represents a slice of a source document and its similarity-scored form
returned by vector search.

Dependencies: pydantic
System role: Document chunk data structures
"""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """
    Document chunk with optional embedding vector.

    Chunks are immutable: embedding a chunk produces a new instance via
    with_vector() rather than mutating the vector in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique chunk identifier (uuid4, content independent)")
    text: str = Field(description="Chunk text content")
    source_file: str = Field(description="Normalized relative path of the source file")
    chunk_index: int = Field(description="Zero-based position within the source", ge=0)
    fingerprint: str = Field(description="Source file content hash at chunking time")
    vector: list[float] | None = Field(default=None, description="Embedding vector")

    @property
    def has_vector(self) -> bool:
        """Whether the chunk carries a non-empty embedding."""
        return bool(self.vector)

    def with_vector(self, vector: list[float]) -> "Chunk":
        """
        Return a copy of this chunk carrying the given embedding.

        Args:
            vector: Embedding vector

        Returns:
            Chunk: New chunk with the vector set
        """
        return self.model_copy(update={"vector": list(vector)})


class ScoredChunk(BaseModel):
    """A chunk paired with its similarity to a query (higher is closer)."""

    chunk: Chunk = Field(description="Matched chunk (vector may be omitted)")
    score: float = Field(description="Similarity score")
