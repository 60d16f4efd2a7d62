"""
Database boundary layer.

Provides SQLAlchemy models, connection management and the source ledger.

Dependencies: sqlalchemy
System role: Relational persistence adapter
"""

from orchestrator.boundary.db.base import Base
from orchestrator.boundary.db.connection import (
    create_tables,
    get_async_engine,
    get_async_session_factory,
)
from orchestrator.boundary.db.models import ChunkModel, SourceModel
from orchestrator.boundary.db.source_ledger import SourceLedger

__all__ = [
    "Base",
    "ChunkModel",
    "SourceModel",
    "SourceLedger",
    "create_tables",
    "get_async_engine",
    "get_async_session_factory",
]
