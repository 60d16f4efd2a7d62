"""
Boundary layer.

Adapters to external systems: relational database, vector index,
embedding provider and the local file system.
"""
