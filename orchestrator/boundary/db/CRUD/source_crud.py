"""
Source record CRUD operations.

Provides ledger-specific queries over SourceModel for change detection
and reporting.

Dependencies: sqlalchemy, orchestrator.boundary.db.models
System role: Source ledger persistence operations
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from orchestrator.boundary.db.CRUD.base_crud import BaseCRUD
from orchestrator.boundary.db.models import SourceModel


class SourceCRUD(BaseCRUD[SourceModel]):
    """
    CRUD operations for SourceModel.

    Extends BaseCRUD with lookups by file path and fingerprint.
    """

    def __init__(self) -> None:
        """Initialize SourceCRUD with SourceModel."""
        super().__init__(SourceModel)

    async def get_by_file_path(
        self,
        session: AsyncSession,
        file_path: str,
    ) -> SourceModel | None:
        """
        Retrieve the record for a file path.

        Args:
            session: Async database session
            file_path: Normalized relative path

        Returns:
            SourceModel if found, None otherwise
        """
        stmt = select(SourceModel).where(SourceModel.file_path == file_path)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_path_and_hash(
        self,
        session: AsyncSession,
        file_path: str,
        file_hash: str,
    ) -> bool:
        """
        Check whether exactly this path and content hash are recorded.

        Args:
            session: Async database session
            file_path: Normalized relative path
            file_hash: SHA-256 of the current content

        Returns:
            True if the file is unchanged since its last successful index
        """
        stmt = select(SourceModel.id).where(
            SourceModel.file_path == file_path,
            SourceModel.file_hash == file_hash,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def delete_by_file_path(self, session: AsyncSession, file_path: str) -> bool:
        """
        Delete the record for a file path.

        Returns:
            True if a record was deleted, False if none existed
        """
        return await self.delete_where(session, SourceModel.file_path == file_path) > 0

    async def sum_chunk_count(self, session: AsyncSession) -> int:
        """
        Sum chunk counts across all records.

        Returns:
            Total chunks tracked by the ledger (0 when empty)
        """
        stmt = select(func.coalesce(func.sum(SourceModel.chunk_count), 0))
        result = await session.execute(stmt)
        return int(result.scalar_one())


source_crud = SourceCRUD()
