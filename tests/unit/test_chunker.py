"""
Test suite for paragraph chunking.

Tests budget handling, ordering, determinism and blank input.

System role: Verification of the chunking stage
"""

import uuid

import pytest

from orchestrator.core.chunker import Chunker, estimate_tokens

FINGERPRINT = "f" * 64


@pytest.fixture
def chunker() -> Chunker:
    """Provide chunker with a 5-token (about 20 character) budget."""
    return Chunker(max_tokens=5)


class TestChunkerSplit:
    """Test suite for Chunker.split()."""

    def test_split_should_group_paragraphs_within_budget(self, chunker: Chunker) -> None:
        """Test paragraphs accumulate until the estimate exceeds the budget."""
        # Arrange
        text = "aaaaaaaaaa\n\nbbbbbbbbbb\n\ncccccccccc"

        # Act
        chunks = chunker.split(text, "doc.md", FINGERPRINT)

        # Assert
        assert [chunk.text for chunk in chunks] == ["aaaaaaaaaa\n\nbbbbbbbbbb", "cccccccccc"]
        assert [chunk.chunk_index for chunk in chunks] == [0, 1]

    def test_split_should_keep_oversize_paragraph_whole(self) -> None:
        """Test a paragraph over budget becomes one chunk instead of being cut."""
        # Arrange
        paragraph = "x" * 400

        # Act
        chunks = Chunker(max_tokens=1).split(f"short\n\n{paragraph}\n\ntail", "doc.md", FINGERPRINT)

        # Assert
        assert [chunk.text for chunk in chunks] == ["short", paragraph, "tail"]

    def test_split_should_carry_source_and_fingerprint(self, chunker: Chunker) -> None:
        """Test metadata is copied onto every chunk and ids are uuids."""
        chunks = chunker.split("one\n\ntwo", "guides/setup.md", FINGERPRINT)

        for chunk in chunks:
            assert chunk.source_file == "guides/setup.md"
            assert chunk.fingerprint == FINGERPRINT
            assert chunk.vector is None
            uuid.UUID(chunk.id)

    def test_split_should_be_deterministic_except_ids(self, chunker: Chunker) -> None:
        """Test the same input yields the same texts and indexes with fresh ids."""
        # Arrange
        text = "alpha beta\n\n\n\ngamma delta epsilon\n\nzeta"

        # Act
        first = chunker.split(text, "doc.md", FINGERPRINT)
        second = chunker.split(text, "doc.md", FINGERPRINT)

        # Assert
        assert [(c.text, c.chunk_index) for c in first] == [(c.text, c.chunk_index) for c in second]
        assert {c.id for c in first}.isdisjoint({c.id for c in second})

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\n", " \t\n\n  \n"])
    def test_split_should_return_empty_for_blank_text(self, chunker: Chunker, text: str) -> None:
        """Test empty and whitespace-only input yields no chunks."""
        assert chunker.split(text, "doc.md", FINGERPRINT) == []

    def test_split_should_normalize_windows_line_endings(self) -> None:
        """Test CRLF blank lines separate paragraphs."""
        chunks = Chunker(max_tokens=1).split("first\r\n\r\nsecond", "doc.md", FINGERPRINT)

        assert [chunk.text for chunk in chunks] == ["first", "second"]

    def test_single_newlines_should_not_split(self, chunker: Chunker) -> None:
        """Test a single line break stays inside a paragraph."""
        chunks = chunker.split("line one\nline two", "doc.md", FINGERPRINT)

        assert [chunk.text for chunk in chunks] == ["line one\nline two"]


class TestChunkerInit:
    """Test suite for Chunker construction."""

    def test_init_should_reject_non_positive_budget(self) -> None:
        """Test max_tokens must be at least 1."""
        with pytest.raises(ValueError):
            Chunker(max_tokens=0)

    def test_estimate_tokens_should_use_four_chars_per_token(self) -> None:
        assert estimate_tokens(0) == 0
        assert estimate_tokens(7) == 1
        assert estimate_tokens(2048) == 512
