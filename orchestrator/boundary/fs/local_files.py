"""
Corpus file system access.

Discovery returns paths relative to the corpus root, normalized with
normalize_path so the same file always maps to the same ledger key.

Dependencies: pathlib
System role: Source document boundary for the indexer
"""

import logging
from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

from orchestrator.core.paths import normalize_path

logger = logging.getLogger(__name__)


@runtime_checkable
class FileSystemPort(Protocol):
    """Read-only view of the document corpus. All methods may raise OSError."""

    def exists_root(self) -> bool: ...

    def list_files(self, extensions: Iterable[str]) -> list[str]: ...

    def read_bytes(self, file_path: str) -> bytes: ...

    def size(self, file_path: str) -> int: ...


class LocalFileSystem:
    """FileSystemPort over a local directory tree."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def exists_root(self) -> bool:
        """True when the corpus root exists and is a directory."""
        return self._root.is_dir()

    def list_files(self, extensions: Iterable[str]) -> list[str]:
        """
        Recursively list regular files with a supported extension.

        Args:
            extensions: Suffixes such as ".md" (matched case-insensitively)

        Returns:
            list[str]: Sorted normalized paths relative to the root
        """
        wanted = {ext.lower() for ext in extensions}
        found = [
            normalize_path(str(path.relative_to(self._root)))
            for path in self._root.rglob("*")
            if path.is_file() and path.suffix.lower() in wanted
        ]
        logger.debug(f"{__name__}:list_files - Discovered {len(found)} files under {self._root}")
        return sorted(found)

    def read_bytes(self, file_path: str) -> bytes:
        """Full content of a corpus file."""
        return self._resolve(file_path).read_bytes()

    def size(self, file_path: str) -> int:
        """Size of a corpus file in bytes."""
        return self._resolve(file_path).stat().st_size

    def _resolve(self, file_path: str) -> Path:
        return self._root / normalize_path(file_path)
