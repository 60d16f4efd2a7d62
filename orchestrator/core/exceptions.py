"""
Exception hierarchy for the context orchestrator.

Provides layered exception structure for indexing and retrieval errors.
All exceptions include context for observability and debugging.

Per-file errors (FileReadError, EmbeddingUnavailableError) are recorded by the
indexer and the pass continues. StorageUnavailableError aborts the current
pass or request. InvalidInputError rejects a call before any effect.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class OrchestratorError(Exception):
    """Base exception for all context orchestrator errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(OrchestratorError):
    """Raised when a call is rejected for malformed input."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid input error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class FileReadError(OrchestratorError):
    """Raised when a corpus file cannot be read or decoded."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize file read error.

        Args:
            message: Error message
            file_path: Normalized path of the unreadable file
            details: Additional context
        """
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, details)


class EmbeddingUnavailableError(OrchestratorError):
    """Raised when the embedding provider fails (rate limit, network, auth, timeout)."""

    pass


class StorageUnavailableError(OrchestratorError):
    """Raised when the source ledger or the vector index cannot be reached."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, search, delete, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class IngestionInProgressError(OrchestratorError):
    """Raised when an ingestion pass is requested while another is running."""

    pass
