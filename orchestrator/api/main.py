"""
FastAPI application with assembled routers.

The lifespan builds the service container (unless one is injected), runs
the startup ingestion pass and starts the optional re-scan loop.

Dependencies: fastapi, orchestrator.api.routers, orchestrator.container
System role: API assembly and lifecycle
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from orchestrator.configs import Settings, get_settings
from orchestrator.container import Container
from orchestrator.observability.logger import configure_logging
from .routers import (
    health_router,
    index_router,
    ingest_router,
    query_router,
    sources_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    # Startup
    container: Container | None = app.state.container
    owns_container = container is None
    if owns_container:
        settings = app.state.settings or get_settings()
        configure_logging(settings.log_level)
        container = await Container.build(settings)
        app.state.container = container

    try:
        await container.runner.run_startup()
    except Exception:
        logger.exception(f"{__name__}:lifespan - Startup ingestion failed, aborting startup")
        if owns_container:
            await container.close()
            app.state.container = None
        raise
    container.runner.start_rescan()
    logger.info(f"{__name__}:lifespan - Application startup complete")

    yield

    # Shutdown
    await container.runner.stop_rescan()
    if owns_container:
        await container.close()
        app.state.container = None
    logger.info(f"{__name__}:lifespan - Application shutdown")


def create_app(
    container: Container | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: Pre-built services; built at startup when None
        settings: Settings used to build the container (defaults to get_settings())

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Context Orchestrator API",
        description="Incremental document indexing and context retrieval",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container
    app.state.settings = settings

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(index_router, prefix="/api/v1")
    app.include_router(query_router, prefix="/api/v1")
    app.include_router(ingest_router, prefix="/api/v1")
    app.include_router(sources_router, prefix="/api/v1")
    app.include_router(health_router, prefix="/api/v1")

    return app
