"""
Query API models.

Request validation and response shapes for context retrieval.

Dependencies: pydantic, orchestrator.models.chunk
System role: Retrieval request/response contract
"""

from pydantic import BaseModel, Field, field_validator

from orchestrator.models.chunk import ScoredChunk


class QueryRequest(BaseModel):
    """Request body for the query endpoint."""

    question: str = Field(description="Natural language question", min_length=1)
    max_results: int = Field(default=5, description="Number of chunks to return", ge=1, le=20)

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Question is required")
        return value


class QueryResult(BaseModel):
    """A single matched chunk."""

    content: str = Field(description="Chunk text")
    source_file: str = Field(description="Path of the source file")
    chunk_index: int = Field(description="Position of the chunk within its source")
    score: float = Field(description="Cosine similarity (higher is more similar)")

    @classmethod
    def from_scored(cls, scored: ScoredChunk) -> "QueryResult":
        """Build a result from a search hit."""
        return cls(
            content=scored.chunk.text,
            source_file=scored.chunk.source_file,
            chunk_index=scored.chunk.chunk_index,
            score=scored.score,
        )


class QueryResponse(BaseModel):
    """Response from the query endpoint."""

    results: list[QueryResult] = Field(description="Matches ordered by relevance")
    total_chunks: int = Field(description="Chunks currently in the index")
    elapsed_ms: float = Field(description="Query processing time in milliseconds")
