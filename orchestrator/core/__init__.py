"""
Core domain layer.

Hashing, chunking, path normalization, the indexer and the retriever.
Import submodules directly; this package does not re-export them.
"""
