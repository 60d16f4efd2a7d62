"""
Application container.

Builds every collaborator once from Settings and hands them to the
indexer and retriever explicitly.

Dependencies: orchestrator.configs, orchestrator.boundary, orchestrator.core
System role: Composition root
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from orchestrator.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from orchestrator.boundary.db.source_ledger import SourceLedger
from orchestrator.boundary.embeddings.embedding_port import EmbeddingPort
from orchestrator.boundary.embeddings.factory import get_embedding_port
from orchestrator.boundary.fs.local_files import LocalFileSystem
from orchestrator.boundary.vdb.vector_index import VectorIndex
from orchestrator.boundary.vdb.vector_store_factory import get_vector_index
from orchestrator.configs.settings import Settings
from orchestrator.core.chunker import Chunker
from orchestrator.core.health import IngestionHealth
from orchestrator.core.indexer import Indexer
from orchestrator.core.retriever import Retriever
from orchestrator.core.runner import IngestionRunner

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """Wired application services."""

    settings: Settings
    engine: AsyncEngine
    ledger: SourceLedger
    vector_index: VectorIndex
    embedder: EmbeddingPort
    indexer: Indexer
    retriever: Retriever
    health: IngestionHealth
    runner: IngestionRunner

    @classmethod
    async def build(
        cls,
        settings: Settings,
        embedder: EmbeddingPort | None = None,
    ) -> "Container":
        """
        Create engine, tables and services from settings.

        Args:
            settings: Application settings
            embedder: Embedding port override (defaults to the configured provider)

        Returns:
            Container: Ready-to-use services
        """
        engine = get_async_engine(settings.database)
        await create_tables(engine)
        session_factory = get_async_session_factory(engine)

        ledger = SourceLedger(session_factory)
        vector_index = get_vector_index(settings.vector_store, session_factory)
        embedder = embedder or get_embedding_port(settings.embedding)
        ingestion = settings.ingestion
        timeout = settings.embedding.timeout_seconds

        indexer = Indexer(
            ledger=ledger,
            vector_index=vector_index,
            embedder=embedder,
            file_system=LocalFileSystem(ingestion.docs_path),
            chunker=Chunker(max_tokens=ingestion.max_tokens),
            supported_extensions=ingestion.supported_extensions,
            incremental=ingestion.incremental,
            max_workers=ingestion.max_workers,
            embedding_timeout=timeout,
        )
        health = IngestionHealth()
        runner = IngestionRunner(
            indexer=indexer,
            health=health,
            enabled=ingestion.enabled,
            fail_on_error=ingestion.fail_on_error,
            rescan_interval_seconds=ingestion.rescan_interval_seconds,
        )

        logger.info(
            f"{__name__}:build - Container ready",
            extra={
                "store_type": settings.vector_store.store_type,
                "docs_path": ingestion.docs_path,
            },
        )
        return cls(
            settings=settings,
            engine=engine,
            ledger=ledger,
            vector_index=vector_index,
            embedder=embedder,
            indexer=indexer,
            retriever=Retriever(vector_index, embedder, embedding_timeout=timeout),
            health=health,
            runner=runner,
        )

    async def close(self) -> None:
        """Stop background work and release connections."""
        await self.runner.stop_rescan()
        await self.vector_index.close()
        await self.engine.dispose()
        logger.info(f"{__name__}:close - Container closed")
