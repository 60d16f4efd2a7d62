"""
Content fingerprinting for change detection.

Files with the same fingerprint have not changed and can be skipped.

Dependencies: hashlib
System role: Deterministic SHA-256 content hashes
"""

import hashlib
from pathlib import Path

_READ_BLOCK_SIZE = 1024 * 1024


def hash_bytes(data: bytes) -> str:
    """
    Compute the SHA-256 fingerprint of raw bytes.

    Args:
        data: Content to hash

    Returns:
        str: 64-character lowercase hex digest
    """
    return hashlib.sha256(data).hexdigest()


def hash_text(content: str) -> str:
    """
    Compute the SHA-256 fingerprint of a string (UTF-8 encoded).

    Args:
        content: Text to hash

    Returns:
        str: 64-character lowercase hex digest
    """
    return hash_bytes(content.encode("utf-8"))


def hash_file(file_path: str | Path) -> str:
    """
    Compute the SHA-256 fingerprint of a file's full content.

    Args:
        file_path: Path to the file

    Returns:
        str: 64-character lowercase hex digest

    Raises:
        OSError: If the file cannot be read
    """
    digest = hashlib.sha256()
    with open(file_path, "rb") as handle:
        for block in iter(lambda: handle.read(_READ_BLOCK_SIZE), b""):
            digest.update(block)
    return digest.hexdigest()


def file_size(file_path: str | Path) -> int:
    """
    Get the file size in bytes.

    Raises:
        OSError: If the file cannot be read
    """
    return Path(file_path).stat().st_size
