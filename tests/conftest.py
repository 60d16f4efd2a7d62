"""
Shared test fixtures and configuration for entire test suite.

Provides: temp-file and in-memory SQLite engines, session factory, both vector index
backends, a deterministic keyword embedder, a temporary corpus and an
indexer factory.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from pathlib import Path
from typing import Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from orchestrator.boundary.db.base import Base
from orchestrator.boundary.db.connection import get_async_session_factory
from orchestrator.boundary.db.source_ledger import SourceLedger
from orchestrator.boundary.fs.local_files import LocalFileSystem
from orchestrator.boundary.vdb.faiss_store import FAISSVectorIndex
from orchestrator.boundary.vdb.memory_store import InMemoryVectorIndex
from orchestrator.boundary.vdb.vector_index import VectorIndex
from orchestrator.core.chunker import Chunker
from orchestrator.core.indexer import Indexer
from tests.fakes import KeywordEmbeddingPort


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncEngine:
    """
    Create a temp-file SQLite async engine with all tables.

    A file database gives each concurrent session its own connection, which
    the indexer relies on when it processes files in parallel.

    Yields:
        AsyncEngine: Engine for a fresh database
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'orchestrator.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def memory_engine() -> AsyncEngine:
    """
    Create in-memory SQLite async engine with all tables.

    Every session shares one connection through StaticPool, so only use it
    for tests that never open sessions concurrently.

    Yields:
        AsyncEngine: In-memory engine
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Provide session factory bound to the test engine."""
    return get_async_session_factory(engine)


@pytest.fixture
def ledger(session_factory: async_sessionmaker) -> SourceLedger:
    """Provide SourceLedger over the test database."""
    return SourceLedger(session_factory)


@pytest.fixture
def faiss_dir(tmp_path: Path) -> Path:
    """Directory for persisted FAISS index files."""
    return tmp_path / "faiss_index"


@pytest.fixture
def faiss_index(session_factory: async_sessionmaker, faiss_dir: Path) -> FAISSVectorIndex:
    """Provide FAISS HNSW index persisted under a temp directory."""
    return FAISSVectorIndex(session_factory=session_factory, index_dir=str(faiss_dir))


@pytest.fixture(params=["memory", "faiss"])
def vector_index(
    request: pytest.FixtureRequest,
    session_factory: async_sessionmaker,
    faiss_dir: Path,
) -> VectorIndex:
    """Provide each vector index backend in turn."""
    if request.param == "memory":
        return InMemoryVectorIndex()
    return FAISSVectorIndex(session_factory=session_factory, index_dir=str(faiss_dir))


@pytest.fixture
def embedder() -> KeywordEmbeddingPort:
    """Provide deterministic keyword embedder."""
    return KeywordEmbeddingPort()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """
    Create a small corpus.

    Returns:
        Path: Corpus root with two markdown guides and one text note
    """
    root = tmp_path / "docs"
    (root / "guides").mkdir(parents=True)
    (root / "guides" / "setup.md").write_text(
        "Install the database driver.\n\nConfigure the connection pool size.",
        encoding="utf-8",
    )
    (root / "guides" / "deploy.md").write_text(
        "Deploy the service with docker compose.",
        encoding="utf-8",
    )
    (root / "notes.txt").write_text("Vector search ranks chunks by cosine similarity.", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG not indexed")
    return root


@pytest.fixture
def make_indexer(
    ledger: SourceLedger,
    embedder: KeywordEmbeddingPort,
    docs_dir: Path,
) -> Callable[..., Indexer]:
    """
    Factory for indexers over the test corpus.

    Keyword arguments override any Indexer constructor argument.
    """

    def factory(vector_index: VectorIndex, **overrides) -> Indexer:
        options = {
            "ledger": ledger,
            "vector_index": vector_index,
            "embedder": embedder,
            "file_system": LocalFileSystem(docs_dir),
            "chunker": Chunker(max_tokens=512),
            "embedding_timeout": 5.0,
        }
        options.update(overrides)
        return Indexer(**options)

    return factory
