"""
Sources API endpoint.

Routes: GET /sources

Dependencies: fastapi, orchestrator.boundary.db
System role: Indexed corpus overview HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from orchestrator.api.deps import get_ledger
from orchestrator.boundary.db.source_ledger import SourceLedger
from orchestrator.core.exceptions import StorageUnavailableError


class SourcesResponse(BaseModel):
    """Ledger totals."""

    status: str
    file_count: int
    chunk_count: int


router = APIRouter(prefix="/sources", tags=["sources"])


@router.get("", response_model=SourcesResponse)
async def list_sources(ledger: SourceLedger = Depends(get_ledger)) -> SourcesResponse:
    """Report how many files and chunks are indexed."""
    try:
        file_count = await ledger.count()
        chunk_count = await ledger.total_chunk_count()
    except StorageUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return SourcesResponse(
        status="indexed" if file_count > 0 else "empty",
        file_count=file_count,
        chunk_count=chunk_count,
    )
