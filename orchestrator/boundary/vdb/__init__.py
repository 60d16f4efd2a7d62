"""
Vector database boundary layer.

Dependencies: faiss-cpu, numpy
System role: Vector storage and similarity search adapters
"""

from orchestrator.boundary.vdb.faiss_store import FAISSVectorIndex
from orchestrator.boundary.vdb.memory_store import InMemoryVectorIndex
from orchestrator.boundary.vdb.vector_index import VectorIndex
from orchestrator.boundary.vdb.vector_store_factory import get_vector_index

__all__ = [
    "FAISSVectorIndex",
    "InMemoryVectorIndex",
    "VectorIndex",
    "get_vector_index",
]
