"""
Domain models.

Exports: Chunk, ScoredChunk, SourceRecord, IngestionSummary, FileOutcome,
FileFailure, FileStatus, QueryRequest, QueryResult, QueryResponse
"""

from .chunk import Chunk, ScoredChunk
from .ingestion import FileFailure, FileOutcome, FileStatus, IngestionSummary
from .query import QueryRequest, QueryResponse, QueryResult
from .source import SourceRecord

__all__ = [
    "Chunk",
    "ScoredChunk",
    "SourceRecord",
    "IngestionSummary",
    "FileOutcome",
    "FileFailure",
    "FileStatus",
    "QueryRequest",
    "QueryResult",
    "QueryResponse",
]
