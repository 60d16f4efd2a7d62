"""API dependencies."""

from orchestrator.api.deps.dependencies import (
    get_container,
    get_health,
    get_ledger,
    get_retriever,
    get_runner,
)

__all__ = [
    "get_container",
    "get_health",
    "get_ledger",
    "get_retriever",
    "get_runner",
]
