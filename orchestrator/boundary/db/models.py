"""
ORM models for the source ledger and chunk metadata.

ingested_sources: one row per indexed file, keyed by normalized path.
document_chunks: one row per stored chunk, with the embedding and an
integer ordinal used as the FAISS vector id.

Dependencies: sqlalchemy, orchestrator.boundary.db.base
System role: Persistent layout for incremental indexing
"""

from sqlalchemy import JSON, BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from orchestrator.boundary.db.base import Base, TimestampMixin, UUIDMixin


class SourceModel(Base, UUIDMixin, TimestampMixin):
    """
    Indexed source file.

    Attributes:
        id: UUID primary key (auto-generated)
        file_path: Normalized relative path (unique, 500 char limit)
        file_hash: SHA-256 of the content at last successful index
        file_size: Size in bytes
        chunk_count: Chunks stored for this path
        created_at: First successful index (UTC)
        updated_at: Last content change re-indexed (UTC)
    """

    __tablename__ = "ingested_sources"

    file_path: Mapped[str] = mapped_column(
        String(500),
        unique=True,
        index=True,
        nullable=False,
    )
    file_hash: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ChunkModel(Base, TimestampMixin):
    """
    Stored chunk with its embedding.

    ordinal never repeats (sqlite_autoincrement / a sequence on PostgreSQL),
    so a deleted chunk's FAISS id is never handed to a new chunk.

    Attributes:
        ordinal: Autoincrement integer key, doubles as the FAISS vector id
        id: Chunk identifier (unique)
        content: Chunk text
        source_file: Normalized source path (indexed for delete-by-source)
        chunk_index: Position within the source
        file_hash: Source fingerprint at chunking time
        embedding: Vector as a JSON float array
    """

    __tablename__ = "document_chunks"
    __table_args__ = {"sqlite_autoincrement": True}

    ordinal: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    source_file: Mapped[str] = mapped_column(String(500), index=True, nullable=False)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    file_hash: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)
