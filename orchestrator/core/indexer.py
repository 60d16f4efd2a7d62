"""
Incremental document indexer.

One pass discovers corpus files, removes sources that disappeared,
skips files whose fingerprint is unchanged, and re-chunks, re-embeds and
stores everything else.

Dependencies: orchestrator.boundary, orchestrator.core
System role: Ingestion orchestration
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Iterable

from orchestrator.boundary.db.source_ledger import SourceLedger
from orchestrator.boundary.embeddings.embedding_port import EmbeddingPort, embed_with_timeout
from orchestrator.boundary.fs.local_files import FileSystemPort
from orchestrator.boundary.vdb.vector_index import VectorIndex
from orchestrator.core.chunker import Chunker
from orchestrator.core.exceptions import (
    EmbeddingUnavailableError,
    FileReadError,
    IngestionInProgressError,
    StorageUnavailableError,
)
from orchestrator.core.hasher import hash_bytes
from orchestrator.models.ingestion import (
    FileFailure,
    FileOutcome,
    FileStatus,
    IngestionSummary,
)
from orchestrator.models.source import SourceRecord
from orchestrator.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md", ".txt", ".adoc")


class Indexer:
    """
    Keeps the vector index and the source ledger in step with the corpus.

    For every file the ledger record and the stored chunks describe the
    same content: a record is written only after its chunks are stored, and
    a changed file loses both its chunks and its record before it is
    re-chunked. A file that fails mid-way is left with neither, so the next
    pass treats it as new.

    Queries may run while a pass is active. A query that lands between
    the delete and the upsert of a changed source can transiently see no
    chunks for that source, and one that lands between a stray-chunk
    cleanup and its upsert can see stale ones. The window closes when the
    file's upsert completes.

    Passes are not re-entrant: run_once raises IngestionInProgressError
    while another pass is running.

    The ledger is only trusted for skipping while the index holds at least
    as many chunks as the ledger records. A volatile index that restarted
    empty over a persistent ledger gets every file re-indexed.
    """

    def __init__(
        self,
        ledger: SourceLedger,
        vector_index: VectorIndex,
        embedder: EmbeddingPort,
        file_system: FileSystemPort,
        chunker: Chunker,
        supported_extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        incremental: bool = True,
        max_workers: int = 4,
        embedding_timeout: float = 30.0,
    ) -> None:
        """
        Initialize indexer.

        Args:
            ledger: Source ledger
            vector_index: Vector index backend
            embedder: Embedding port
            file_system: Corpus access
            chunker: Paragraph chunker
            supported_extensions: File suffixes to index (case-insensitive)
            incremental: Skip files whose fingerprint is unchanged
            max_workers: Files processed concurrently
            embedding_timeout: Seconds allowed per embedding call
        """
        self._ledger = ledger
        self._index = vector_index
        self._embedder = embedder
        self._fs = file_system
        self._chunker = chunker
        self._extensions = tuple(ext.lower() for ext in supported_extensions)
        self._incremental = incremental
        self._max_workers = max_workers
        self._embedding_timeout = embedding_timeout

        self._path_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._running = False

    @property
    def is_running(self) -> bool:
        """True while a pass is active."""
        return self._running

    async def run_once(self) -> IngestionSummary:
        """
        Run one ingestion pass.

        Steps:
        1. Discover supported files under the corpus root
        2. Remove chunks and records of sources no longer present
        3. Check the ledger still describes the index
        4. Process files concurrently (skip, replace or add)
        5. Summarize outcomes

        Returns:
            IngestionSummary: Counts and per-file failures

        Raises:
            IngestionInProgressError: Another pass is running
            StorageUnavailableError: Ledger or vector index failure (pass aborted)
            FileReadError: The corpus root cannot be listed
        """
        if self._running:
            raise IngestionInProgressError("An ingestion pass is already running")
        self._running = True
        try:
            return await self._run()
        finally:
            self._running = False

    async def _run(self) -> IngestionSummary:
        started_at = datetime.now(timezone.utc)

        if not await asyncio.to_thread(self._fs.exists_root):
            logger.warning(
                f"{__name__}:run_once - Corpus root does not exist, nothing to index "
                f"(orphan cleanup skipped)"
            )
            return IngestionSummary(started_at=started_at, finished_at=datetime.now(timezone.utc))

        try:
            discovered = await asyncio.to_thread(self._fs.list_files, self._extensions)
        except OSError as e:
            raise FileReadError(
                "Cannot list corpus root",
                details={"error": str(e)},
            ) from e

        logger.info(f"{__name__}:run_once - Discovered {len(discovered)} files")

        deleted = await self._remove_orphans(set(discovered))
        skip_unchanged = self._incremental and await self._ledger_matches_index()

        semaphore = asyncio.Semaphore(self._max_workers)

        async def bounded(file_path: str) -> FileOutcome:
            async with semaphore:
                return await self._process_file(file_path, skip_unchanged)

        results = await asyncio.gather(
            *(bounded(file_path) for file_path in discovered),
            return_exceptions=True,
        )

        errors = [result for result in results if isinstance(result, BaseException)]
        if errors:
            fatal = next(
                (error for error in errors if isinstance(error, StorageUnavailableError)),
                errors[0],
            )
            logger.error(
                f"{__name__}:run_once - Pass aborted: {type(fatal).__name__}: {fatal}",
                extra={"errors": len(errors)},
            )
            raise fatal

        summary = IngestionSummary(
            deleted=deleted,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
        for outcome in results:
            if outcome.status == FileStatus.PROCESSED:
                summary.processed += 1
                summary.total_chunks += outcome.chunk_count
            elif outcome.status == FileStatus.SKIPPED:
                summary.skipped += 1
            else:
                summary.failed += 1
                summary.failures.append(
                    FileFailure(file_path=outcome.file_path, error=outcome.reason or "unknown")
                )

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:run_once - Ingestion pass complete",
            processed=summary.processed,
            skipped=summary.skipped,
            deleted=summary.deleted,
            failed=summary.failed,
            total_chunks=summary.total_chunks,
        )
        return summary

    async def _remove_orphans(self, discovered: set[str]) -> int:
        """Delete chunks and records of ledger entries missing from the corpus."""
        deleted = 0
        for record in await self._ledger.all():
            if record.file_path in discovered:
                continue
            async with self._path_locks[record.file_path]:
                removed = await self._index.delete_by_source(record.file_path)
                await self._ledger.delete(record.file_path)
            self._path_locks.pop(record.file_path, None)
            deleted += 1
            logger.info(
                f"{__name__}:_remove_orphans - Removed deleted source",
                extra={"file_path": record.file_path, "chunks": removed},
            )
        return deleted

    async def _ledger_matches_index(self) -> bool:
        """True unless the index holds fewer chunks than the ledger records."""
        recorded = await self._ledger.total_chunk_count()
        stored = await self._index.size()
        if stored >= recorded:
            return True
        logger.warning(
            f"{__name__}:_ledger_matches_index - Vector index is missing chunks the ledger "
            f"records, re-indexing every file",
            extra={"ledger_chunks": recorded, "index_chunks": stored},
        )
        return False

    async def _process_file(self, file_path: str, skip_unchanged: bool) -> FileOutcome:
        """
        Index a single file.

        Read, decode and embedding failures become a FAILED outcome; storage
        failures propagate.
        """
        try:
            async with self._path_locks[file_path]:
                return await self._index_file(file_path, skip_unchanged)
        except (FileReadError, EmbeddingUnavailableError) as e:
            logger.warning(
                f"{__name__}:_process_file - Failed to index {file_path}: {e}",
                extra={"file_path": file_path, "error_type": type(e).__name__},
            )
            return FileOutcome(file_path=file_path, status=FileStatus.FAILED, reason=str(e))

    async def _index_file(self, file_path: str, skip_unchanged: bool) -> FileOutcome:
        content = await self._read(file_path)
        fingerprint = hash_bytes(content)
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileReadError(
                "File is not valid UTF-8",
                file_path=file_path,
                details={"error": str(e)},
            ) from e

        if skip_unchanged and await self._ledger.exists(file_path, fingerprint):
            logger.debug(f"{__name__}:_index_file - Unchanged, skipping {file_path}")
            return FileOutcome(file_path=file_path, status=FileStatus.SKIPPED)

        existing = await self._ledger.find(file_path)
        if existing is not None:
            removed = await self._index.delete_by_source(file_path)
            await self._ledger.delete(file_path)
            logger.info(
                f"{__name__}:_index_file - Replacing {removed} chunks of {file_path}",
                extra={"old_fingerprint": existing.fingerprint, "new_fingerprint": fingerprint},
            )
        else:
            stray = await self._index.delete_by_source(file_path)
            if stray:
                logger.warning(
                    f"{__name__}:_index_file - Removed {stray} stray chunks of untracked {file_path}"
                )

        chunks = self._chunker.split(text, file_path, fingerprint)
        embedded = [
            chunk.with_vector(
                await embed_with_timeout(self._embedder, chunk.text, self._embedding_timeout)
            )
            for chunk in chunks
        ]
        if embedded:
            await self._index.upsert_many(embedded)

        now = datetime.now(timezone.utc)
        await self._ledger.upsert(
            SourceRecord(
                file_path=file_path,
                fingerprint=fingerprint,
                size_bytes=len(content),
                chunk_count=len(embedded),
                first_indexed_at=existing.first_indexed_at if existing else now,
                last_updated_at=now,
            )
        )

        logger.info(f"{__name__}:_index_file - Indexed {file_path} ({len(embedded)} chunks)")
        return FileOutcome(
            file_path=file_path,
            status=FileStatus.PROCESSED,
            chunk_count=len(embedded),
        )

    async def _read(self, file_path: str) -> bytes:
        try:
            return await asyncio.to_thread(self._fs.read_bytes, file_path)
        except OSError as e:
            raise FileReadError(
                "Cannot read file",
                file_path=file_path,
                details={"error": str(e)},
            ) from e
