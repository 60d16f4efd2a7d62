"""
FastAPI dependency providers.

Services are built once by the application lifespan and stored on
app.state.container; these functions expose them to route handlers.

Dependencies: fastapi, orchestrator.container
System role: DI for request handlers
"""

from fastapi import Request

from orchestrator.boundary.db.source_ledger import SourceLedger
from orchestrator.container import Container
from orchestrator.core.health import IngestionHealth
from orchestrator.core.retriever import Retriever
from orchestrator.core.runner import IngestionRunner


def get_container(request: Request) -> Container:
    """Get the application container."""
    return request.app.state.container


def get_retriever(request: Request) -> Retriever:
    return get_container(request).retriever


def get_runner(request: Request) -> IngestionRunner:
    return get_container(request).runner


def get_ledger(request: Request) -> SourceLedger:
    return get_container(request).ledger


def get_health(request: Request) -> IngestionHealth:
    return get_container(request).health
