"""
Persistent FAISS HNSW vector index.

Chunk rows (text, source, fingerprint, embedding) live in the
document_chunks table; vectors are searched through a FAISS HNSW graph
keyed by each row's integer ordinal and persisted to disk.

HNSW graphs cannot remove vectors. Deleting by source is therefore a
metadata-filtered SQL delete: the removed ordinals become tombstones that
search skips, and the graph is rebuilt from the table once tombstones
exceed compact_ratio of the index.

Vectors are L2-normalized and compared by inner product, so scores are
cosine similarities and rank exactly like the in-memory backend.

Dependencies: faiss-cpu, numpy, sqlalchemy
System role: Persistent ANN vector store backend
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Sequence

import faiss
import numpy as np
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from orchestrator.boundary.db.models import ChunkModel
from orchestrator.boundary.vdb.vector_index import (
    normalize_rows,
    validate_batch,
    validate_top_k,
)
from orchestrator.core.exceptions import InvalidInputError, StorageUnavailableError
from orchestrator.core.paths import normalize_path
from orchestrator.models.chunk import Chunk, ScoredChunk

logger = logging.getLogger(__name__)


class FAISSVectorIndex:
    """
    FAISS HNSW index with SQL-backed chunk metadata.

    The index file is reconciled against the table on first use: when it
    is missing, unreadable, or lacks any stored ordinal it is rebuilt from
    the table; ordinals present in the file but not in the table become
    tombstones.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        index_dir: str = "./data/faiss_index",
        index_name: str = "chunks",
        hnsw_m: int = 32,
        ef_construction: int = 200,
        ef_search: int = 64,
        compact_ratio: float = 0.3,
    ) -> None:
        """
        Initialize FAISS vector index.

        Args:
            session_factory: Async session factory for the chunk table
            index_dir: Directory for the persisted index file
            index_name: Index file stem
            hnsw_m: HNSW neighbours per node
            ef_construction: HNSW build-time candidate list size
            ef_search: Minimum HNSW query-time candidate list size
            compact_ratio: Tombstone share that triggers a rebuild
        """
        self._session_factory = session_factory
        self._index_dir = Path(index_dir)
        self._index_name = index_name
        self._hnsw_m = hnsw_m
        self._ef_construction = ef_construction
        self._ef_search = ef_search
        self._compact_ratio = compact_ratio

        self._index: faiss.IndexIDMap2 | None = None
        self._dimension: int | None = None
        self._tombstones: set[int] = set()
        self._loaded = False
        self._load_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    @property
    def index_path(self) -> Path:
        """Location of the persisted FAISS index."""
        return self._index_dir / f"{self._index_name}.faiss"

    async def upsert_many(self, chunks: Sequence[Chunk]) -> None:
        """
        Store embedded chunks.

        Rows are committed first, then their vectors are added to the graph.
        Existing chunk ids are replaced.

        Args:
            chunks: Embedded chunks

        Raises:
            InvalidInputError: Missing vectors, duplicate ids or a dimension
                mismatch (nothing stored)
            StorageUnavailableError: Database or index file failure
        """
        dimension = validate_batch(chunks)
        if dimension is None:
            return

        await self._ensure_loaded()
        if self._dimension is not None and dimension != self._dimension:
            raise InvalidInputError(
                "Vector dimension does not match the index",
                field="vector",
                details={"expected": self._dimension, "actual": dimension},
            )

        async with self._write_lock:
            ids = [chunk.id for chunk in chunks]
            try:
                async with self._session_factory() as session, session.begin():
                    replaced = (
                        await session.execute(
                            select(ChunkModel.ordinal).where(ChunkModel.id.in_(ids))
                        )
                    ).scalars().all()
                    if replaced:
                        await session.execute(delete(ChunkModel).where(ChunkModel.id.in_(ids)))

                    rows = [
                        ChunkModel(
                            id=chunk.id,
                            content=chunk.text,
                            source_file=normalize_path(chunk.source_file),
                            chunk_index=chunk.chunk_index,
                            file_hash=chunk.fingerprint,
                            embedding=[float(value) for value in chunk.vector],
                        )
                        for chunk in chunks
                    ]
                    session.add_all(rows)
                    await session.flush()
                    ordinals = [row.ordinal for row in rows]
            except SQLAlchemyError as e:
                raise self._storage_error("upsert", e) from e

            vectors = normalize_rows(np.array([chunk.vector for chunk in chunks]))
            try:
                if self._index is None:
                    self._index = self._new_index(dimension)
                    self._dimension = dimension
                self._index.add_with_ids(vectors, np.array(ordinals, dtype=np.int64))
            except RuntimeError as e:
                self._loaded = False
                raise self._storage_error("upsert", e) from e

            self._tombstones.update(replaced)
            await self._maybe_compact()
            self._persist()

        logger.info(
            f"{__name__}:upsert_many - Stored {len(chunks)} chunks in vector store",
            extra={"replaced": len(replaced)},
        )

    async def delete_by_source(self, source_file: str) -> int:
        """
        Remove every chunk of a source file via a metadata-filtered delete.

        Args:
            source_file: Source path (normalized internally)

        Returns:
            int: Number of chunks removed (0 if none)

        Raises:
            StorageUnavailableError: Database or index file failure
        """
        source_file = normalize_path(source_file)
        await self._ensure_loaded()

        async with self._write_lock:
            try:
                async with self._session_factory() as session, session.begin():
                    ordinals = (
                        await session.execute(
                            select(ChunkModel.ordinal).where(ChunkModel.source_file == source_file)
                        )
                    ).scalars().all()
                    if ordinals:
                        await session.execute(
                            delete(ChunkModel).where(ChunkModel.source_file == source_file)
                        )
            except SQLAlchemyError as e:
                raise self._storage_error("delete", e) from e

            if ordinals:
                self._tombstones.update(ordinals)
                await self._maybe_compact()
                self._persist()
                logger.info(
                    f"{__name__}:delete_by_source - Removed {len(ordinals)} chunks",
                    extra={"source_file": source_file},
                )
        return len(ordinals)

    async def search(self, query_vector: Sequence[float], top_k: int) -> list[ScoredChunk]:
        """
        Approximate nearest-neighbour search.

        Over-fetches by the tombstone count so deleted vectors never crowd
        out live ones, then orders by score with ties broken by ordinal
        (insertion order).

        Args:
            query_vector: Query embedding
            top_k: Maximum number of results (>= 1)

        Returns:
            list[ScoredChunk]: Best first

        Raises:
            InvalidInputError: top_k < 1 or query dimension mismatch
            StorageUnavailableError: Database failure
        """
        validate_top_k(top_k)
        await self._ensure_loaded()
        if self._index is None or self._index.ntotal - len(self._tombstones) <= 0:
            return []

        query = np.asarray(query_vector, dtype=np.float32)
        if query.shape[0] != self._dimension:
            raise InvalidInputError(
                "Vectors must have same dimension",
                field="query_vector",
                details={"expected": self._dimension, "actual": query.shape[0]},
            )

        fetch_k = min(self._index.ntotal, top_k + len(self._tombstones))
        faiss.downcast_index(self._index.index).hnsw.efSearch = max(self._ef_search, fetch_k)
        scores, labels = self._index.search(normalize_rows(query), fetch_k)

        hits = {
            int(label): float(score)
            for score, label in zip(scores[0], labels[0])
            if label != -1 and int(label) not in self._tombstones
        }
        if not hits:
            return []

        try:
            async with self._session_factory() as session:
                rows = (
                    await session.execute(
                        select(ChunkModel).where(ChunkModel.ordinal.in_(list(hits)))
                    )
                ).scalars().all()
        except SQLAlchemyError as e:
            raise self._storage_error("search", e) from e

        # Rows deleted between the graph lookup and this read are dropped.
        ranked = sorted(rows, key=lambda row: (-hits[row.ordinal], row.ordinal))[:top_k]
        return [
            ScoredChunk(
                chunk=Chunk(
                    id=row.id,
                    text=row.content,
                    source_file=row.source_file,
                    chunk_index=row.chunk_index,
                    fingerprint=row.file_hash,
                ),
                score=hits[row.ordinal],
            )
            for row in ranked
        ]

    async def size(self) -> int:
        """Approximate number of live vectors (graph size minus tombstones)."""
        await self._ensure_loaded()
        if self._index is None:
            return 0
        return max(self._index.ntotal - len(self._tombstones), 0)

    async def close(self) -> None:
        """Drop the in-memory graph; the persisted file stays on disk."""
        self._index = None
        self._dimension = None
        self._tombstones.clear()
        self._loaded = False

    def _new_index(self, dimension: int) -> faiss.IndexIDMap2:
        hnsw = faiss.IndexHNSWFlat(dimension, self._hnsw_m, faiss.METRIC_INNER_PRODUCT)
        hnsw.hnsw.efConstruction = self._ef_construction
        hnsw.hnsw.efSearch = self._ef_search
        return faiss.IndexIDMap2(hnsw)

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        async with self._load_lock:
            if self._loaded:
                return

            try:
                async with self._session_factory() as session:
                    stored = set((await session.execute(select(ChunkModel.ordinal))).scalars().all())
            except SQLAlchemyError as e:
                raise self._storage_error("load", e) from e

            index = self._read_index()
            if index is not None:
                indexed = set(faiss.vector_to_array(index.id_map).tolist())
                if stored <= indexed:
                    self._index = index
                    self._dimension = index.d
                    self._tombstones = indexed - stored
                    self._loaded = True
                    logger.info(
                        f"{__name__}:_ensure_loaded - Loaded index from {self.index_path}",
                        extra={"vectors": index.ntotal, "tombstones": len(self._tombstones)},
                    )
                    return
                logger.warning(
                    f"{__name__}:_ensure_loaded - Index file is missing "
                    f"{len(stored - indexed)} stored chunks, rebuilding"
                )

            await self._rebuild()
            self._persist()
            self._loaded = True

    def _read_index(self) -> faiss.IndexIDMap2 | None:
        if not self.index_path.exists():
            return None
        try:
            return faiss.read_index(str(self.index_path))
        except RuntimeError as e:
            logger.warning(
                f"{__name__}:_read_index - Unreadable index file ({type(e).__name__}): {e}, rebuilding"
            )
            return None

    async def _rebuild(self) -> None:
        """Recreate the graph from the chunk table, clearing tombstones."""
        try:
            async with self._session_factory() as session:
                rows = (
                    await session.execute(
                        select(ChunkModel.ordinal, ChunkModel.embedding).order_by(ChunkModel.ordinal)
                    )
                ).all()
        except SQLAlchemyError as e:
            raise self._storage_error("rebuild", e) from e

        self._tombstones = set()
        if not rows:
            self._index = None
            self._dimension = None
            return

        dimension = len(rows[0].embedding)
        index = self._new_index(dimension)
        index.add_with_ids(
            normalize_rows(np.array([row.embedding for row in rows])),
            np.array([row.ordinal for row in rows], dtype=np.int64),
        )
        self._index = index
        self._dimension = dimension
        logger.info(f"{__name__}:_rebuild - Rebuilt HNSW index with {len(rows)} vectors")

    async def _maybe_compact(self) -> None:
        if self._index is None or not self._tombstones:
            return
        if len(self._tombstones) > self._compact_ratio * self._index.ntotal:
            logger.info(
                f"{__name__}:_maybe_compact - Compacting {len(self._tombstones)} tombstones"
            )
            await self._rebuild()

    def _persist(self) -> None:
        """Write the graph atomically (temp file then rename)."""
        try:
            self._index_dir.mkdir(parents=True, exist_ok=True)
            if self._index is None:
                self.index_path.unlink(missing_ok=True)
                return
            tmp_path = self.index_path.with_suffix(".faiss.tmp")
            faiss.write_index(self._index, str(tmp_path))
            os.replace(tmp_path, self.index_path)
        except (OSError, RuntimeError) as e:
            raise self._storage_error("persist", e) from e

    @staticmethod
    def _storage_error(operation: str, error: Exception) -> StorageUnavailableError:
        logger.error(f"{__name__}:{operation} - {type(error).__name__}: {error}")
        return StorageUnavailableError(
            message="Vector index unavailable",
            operation=operation,
            details={"error": str(error)},
        )
