"""File system boundary layer."""

from orchestrator.boundary.fs.local_files import FileSystemPort, LocalFileSystem

__all__ = ["FileSystemPort", "LocalFileSystem"]
