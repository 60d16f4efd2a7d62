"""
Health check API endpoint.

Routes: GET /health

Dependencies: fastapi, orchestrator.core.health
System role: Ingestion health HTTP API
"""

from fastapi import APIRouter, Depends

from orchestrator.api.deps import get_health
from orchestrator.core.health import HealthSnapshot, IngestionHealth

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthSnapshot)
async def health_check(health: IngestionHealth = Depends(get_health)) -> HealthSnapshot:
    """Status of the latest ingestion pass (UP, DOWN or UNKNOWN)."""
    return health.snapshot()
