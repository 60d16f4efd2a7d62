"""
Test suite for source path normalization.

System role: Verification of canonical ledger and metadata keys
"""

import pytest

from orchestrator.core.paths import normalize_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("guides/setup.md", "guides/setup.md"),
        ("guides\\setup.md", "guides/setup.md"),
        ("./guides//setup.md", "guides/setup.md"),
        ("guides/./nested/../setup.md", "guides/setup.md"),
        ("  notes.txt  ", "notes.txt"),
        ("Guides/Setup.MD", "Guides/Setup.MD"),
        (".", ""),
        ("", ""),
    ],
)
def test_normalize_path(raw: str, expected: str) -> None:
    """Test separators and dot segments collapse while case is preserved."""
    assert normalize_path(raw) == expected


def test_normalize_path_should_be_idempotent() -> None:
    """Test normalizing twice changes nothing."""
    once = normalize_path("a\\b\\..\\c.md")
    assert normalize_path(once) == once == "a/c.md"
