"""
Ingestion result models.

Represents the outcome of a single file and of a full indexing pass.

Dependencies: pydantic
System role: Return types for Indexer.run_once()
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class FileStatus(str, Enum):
    """Per-file outcome within a pass."""

    PROCESSED = "processed"
    SKIPPED = "skipped"
    FAILED = "failed"


class FileOutcome(BaseModel):
    """Result of processing a single file."""

    file_path: str
    status: FileStatus
    chunk_count: int = 0
    reason: str | None = None


class FileFailure(BaseModel):
    """A file that could not be indexed during a pass."""

    file_path: str
    error: str


class IngestionSummary(BaseModel):
    """Counts for one ingestion pass."""

    processed: int = Field(default=0, description="Files chunked, embedded and stored")
    skipped: int = Field(default=0, description="Files unchanged since the last pass")
    deleted: int = Field(default=0, description="Files removed from the corpus and cleaned up")
    failed: int = Field(default=0, description="Files skipped this pass because of an error")
    total_chunks: int = Field(default=0, description="Chunks produced by this pass")
    failures: list[FileFailure] = Field(default_factory=list)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @computed_field
    @property
    def has_changes(self) -> bool:
        """True when the pass added, replaced or removed indexed content."""
        return self.processed > 0 or self.deleted > 0
