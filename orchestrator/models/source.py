"""
Source record domain model.

Dependencies: pydantic
System role: Ledger entry describing an indexed source file
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SourceRecord(BaseModel):
    """
    Ledger entry for one indexed file.

    The fingerprint and chunk_count always describe the chunks currently
    stored in the vector index for file_path.
    """

    file_path: str = Field(description="Normalized relative path (unique key)")
    fingerprint: str = Field(description="SHA-256 of the file content")
    size_bytes: int = Field(default=0, description="File size in bytes", ge=0)
    chunk_count: int = Field(default=0, description="Number of chunks stored", ge=0)
    first_indexed_at: datetime = Field(default_factory=_utcnow)
    last_updated_at: datetime = Field(default_factory=_utcnow)
