"""
Test suite for domain and API models.

System role: Verification of pydantic model contracts
"""

import pytest
from pydantic import ValidationError

from orchestrator.models import (
    Chunk,
    IngestionSummary,
    QueryRequest,
    QueryResult,
    ScoredChunk,
)


@pytest.fixture
def chunk() -> Chunk:
    """Provide an unembedded chunk."""
    return Chunk(id="c1", text="hello", source_file="a.md", chunk_index=0, fingerprint="f")


class TestChunk:
    """Test suite for Chunk immutability and embedding."""

    def test_with_vector_should_return_new_chunk(self, chunk: Chunk) -> None:
        """Test embedding does not mutate the original chunk."""
        # Act
        embedded = chunk.with_vector([0.1, 0.2])

        # Assert
        assert embedded.vector == [0.1, 0.2]
        assert embedded.has_vector
        assert chunk.vector is None
        assert not chunk.has_vector

    def test_chunk_should_be_frozen(self, chunk: Chunk) -> None:
        """Test fields cannot be reassigned."""
        with pytest.raises(ValidationError):
            chunk.text = "changed"

    def test_negative_chunk_index_should_be_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Chunk(id="c", text="t", source_file="a.md", chunk_index=-1, fingerprint="f")


class TestIngestionSummary:
    """Test suite for IngestionSummary.has_changes."""

    @pytest.mark.parametrize(
        ("processed", "deleted", "expected"),
        [(0, 0, False), (1, 0, True), (0, 2, True)],
    )
    def test_has_changes(self, processed: int, deleted: int, expected: bool) -> None:
        summary = IngestionSummary(processed=processed, deleted=deleted, skipped=3)

        assert summary.has_changes is expected
        assert summary.model_dump()["has_changes"] is expected


class TestQueryModels:
    """Test suite for query request validation and result mapping."""

    @pytest.mark.parametrize("question", ["", "   ", "\n\t"])
    def test_blank_question_should_be_rejected(self, question: str) -> None:
        with pytest.raises(ValidationError):
            QueryRequest(question=question)

    @pytest.mark.parametrize("max_results", [0, 21])
    def test_max_results_out_of_range_should_be_rejected(self, max_results: int) -> None:
        with pytest.raises(ValidationError):
            QueryRequest(question="what?", max_results=max_results)

    def test_defaults(self) -> None:
        assert QueryRequest(question="what?").max_results == 5

    def test_from_scored_should_copy_chunk_fields(self, chunk: Chunk) -> None:
        """Test search hit maps onto the response shape."""
        result = QueryResult.from_scored(ScoredChunk(chunk=chunk, score=0.75))

        assert result.model_dump() == {
            "content": "hello",
            "source_file": "a.md",
            "chunk_index": 0,
            "score": 0.75,
        }
