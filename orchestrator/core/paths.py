"""
Source path normalization.

Every path that is compared or stored (discovery, ledger keys, vector
metadata) goes through normalize_path so that the same file always maps
to the same key regardless of the separator style of the host.

Dependencies: posixpath (stdlib)
System role: Canonical source path keys
"""

import posixpath
from pathlib import PurePath


def normalize_path(path: str | PurePath) -> str:
    """
    Normalize a corpus-relative path to its canonical key.

    Backslashes become forward slashes, redundant separators and "."
    segments are collapsed, and leading "./" is dropped. Case is preserved.

    Args:
        path: Relative path in any separator style

    Returns:
        str: Canonical forward-slash relative path

    Example:
        >>> normalize_path("guides\\\\setup.md")
        'guides/setup.md'
    """
    text = str(path).replace("\\", "/").strip()
    if not text:
        return ""
    normalized = posixpath.normpath(text)
    if normalized == ".":
        return ""
    return normalized
