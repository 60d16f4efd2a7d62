"""
API index endpoint.

Routes: GET /

Dependencies: fastapi
System role: Endpoint discovery
"""

from fastapi import APIRouter

router = APIRouter(tags=["index"])

ENDPOINTS = {
    "query": "POST /api/v1/query",
    "ingest": "POST /api/v1/ingest",
    "sources": "GET /api/v1/sources",
    "health": "GET /api/v1/health",
}


@router.get("")
async def api_index() -> dict:
    """List available endpoints."""
    return {"service": "context-orchestrator", "endpoints": ENDPOINTS}
