"""API routers."""

from .health import router as health_router
from .index import router as index_router
from .ingest import router as ingest_router
from .query import router as query_router
from .sources import router as sources_router

__all__ = [
    "health_router",
    "index_router",
    "ingest_router",
    "query_router",
    "sources_router",
]
