"""
Source ledger.

Durable record of which files have been indexed, with their fingerprint,
size and chunk count. Drives the skip / re-index / delete decisions of
the indexer.

Each public call runs in its own transaction, so concurrent callers never
observe a half-written record.

Dependencies: sqlalchemy, orchestrator.boundary.db.CRUD
System role: Persistence of SourceRecord rows
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orchestrator.boundary.db.CRUD.source_crud import SourceCRUD, source_crud
from orchestrator.boundary.db.models import SourceModel
from orchestrator.core.exceptions import StorageUnavailableError
from orchestrator.core.paths import normalize_path
from orchestrator.models.source import SourceRecord

logger = logging.getLogger(__name__)


def _to_record(row: SourceModel) -> SourceRecord:
    return SourceRecord(
        file_path=row.file_path,
        fingerprint=row.file_hash,
        size_bytes=row.file_size,
        chunk_count=row.chunk_count,
        first_indexed_at=row.created_at,
        last_updated_at=row.updated_at,
    )


class SourceLedger:
    """Ledger of indexed source files backed by the ingested_sources table."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        crud: SourceCRUD = source_crud,
    ) -> None:
        """
        Initialize ledger.

        Args:
            session_factory: Async session factory for the ledger database
            crud: CRUD helper for SourceModel
        """
        self._session_factory = session_factory
        self._crud = crud

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise StorageUnavailableError(
                message="Source ledger unavailable",
                operation=operation,
                details={"error": str(e)},
            ) from e

    async def exists(self, file_path: str, fingerprint: str) -> bool:
        """
        Check whether the file is unchanged since its last successful index.

        Args:
            file_path: Relative path (normalized internally)
            fingerprint: Current content hash

        Returns:
            True iff a record with exactly this path and fingerprint exists
        """
        async with self._transaction("exists") as session:
            return await self._crud.exists_by_path_and_hash(
                session, normalize_path(file_path), fingerprint
            )

    async def find(self, file_path: str) -> SourceRecord | None:
        """
        Look up the record for a path.

        Returns:
            SourceRecord if the path was indexed, None otherwise
        """
        async with self._transaction("find") as session:
            row = await self._crud.get_by_file_path(session, normalize_path(file_path))
            return _to_record(row) if row else None

    async def upsert(self, record: SourceRecord) -> SourceRecord:
        """
        Insert or update the record for record.file_path.

        first_indexed_at is kept from an existing row; fingerprint, size,
        chunk count and last_updated_at are replaced.

        Args:
            record: Record to store

        Returns:
            SourceRecord: Stored record as persisted
        """
        file_path = normalize_path(record.file_path)
        async with self._transaction("upsert") as session:
            row = await self._crud.get_by_file_path(session, file_path)
            if row is None:
                row = await self._crud.create(
                    session,
                    file_path=file_path,
                    file_hash=record.fingerprint,
                    file_size=record.size_bytes,
                    chunk_count=record.chunk_count,
                    created_at=record.first_indexed_at,
                    updated_at=record.last_updated_at,
                )
            else:
                row.file_hash = record.fingerprint
                row.file_size = record.size_bytes
                row.chunk_count = record.chunk_count
                row.updated_at = record.last_updated_at
                await session.flush()
            stored = _to_record(row)

        logger.debug(
            f"{__name__}:upsert - Recorded source",
            extra={"file_path": file_path, "chunk_count": record.chunk_count},
        )
        return stored

    async def delete(self, file_path: str) -> bool:
        """
        Remove the record for a path.

        Returns:
            True if a record was removed, False if none existed
        """
        async with self._transaction("delete") as session:
            return await self._crud.delete_by_file_path(session, normalize_path(file_path))

    async def all(self) -> list[SourceRecord]:
        """Return every stored record (used for orphan detection)."""
        async with self._transaction("all") as session:
            rows = await self._crud.get_all(session)
            return [_to_record(row) for row in rows]

    async def total_chunk_count(self) -> int:
        """Sum of chunk counts over all records."""
        async with self._transaction("total_chunk_count") as session:
            return await self._crud.sum_chunk_count(session)

    async def count(self) -> int:
        """Number of tracked files."""
        async with self._transaction("count") as session:
            return await self._crud.count(session)
