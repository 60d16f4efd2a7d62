"""Context orchestrator: incremental document indexing and retrieval."""

__version__ = "0.1.0"
