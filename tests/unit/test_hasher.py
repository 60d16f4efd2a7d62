"""
Test suite for content fingerprinting.

System role: Verification of change detection hashes
"""

from pathlib import Path

import pytest

from orchestrator.core.hasher import file_size, hash_bytes, hash_file, hash_text


class TestHashing:
    """Test suite for hash_bytes / hash_text / hash_file."""

    def test_hash_text_should_match_known_sha256(self) -> None:
        """Test digest of a known string."""
        # Act
        digest = hash_text("abc")

        # Assert
        assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_hash_should_be_64_lowercase_hex(self) -> None:
        """Test digest format."""
        digest = hash_bytes(b"\x00\x01binary")

        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    def test_hash_text_should_equal_hash_of_utf8_bytes(self) -> None:
        """Test text hashing encodes as UTF-8."""
        assert hash_text("héllo") == hash_bytes("héllo".encode("utf-8"))

    def test_different_content_should_have_different_hash(self) -> None:
        """Test one-character change alters the fingerprint."""
        assert hash_text("version 1") != hash_text("version 2")

    def test_hash_file_should_match_hash_of_content(self, tmp_path: Path) -> None:
        """Test streamed file hash equals in-memory hash."""
        # Arrange
        path = tmp_path / "doc.md"
        content = b"# Title\n\n" + b"x" * (3 * 1024 * 1024)
        path.write_bytes(content)

        # Act / Assert
        assert hash_file(path) == hash_bytes(content)
        assert file_size(path) == len(content)

    def test_hash_file_should_raise_oserror_for_missing_file(self, tmp_path: Path) -> None:
        """Test unreadable file surfaces OSError."""
        with pytest.raises(OSError):
            hash_file(tmp_path / "missing.md")
