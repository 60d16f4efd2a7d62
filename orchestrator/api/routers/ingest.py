"""
Ingestion API endpoint.

Routes: POST /ingest

Dependencies: fastapi, orchestrator.core.runner
System role: On-demand re-index HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from orchestrator.api.deps import get_runner
from orchestrator.core.exceptions import IngestionInProgressError, OrchestratorError
from orchestrator.core.runner import IngestionRunner
from orchestrator.models.ingestion import IngestionSummary

router = APIRouter(prefix="/ingest", tags=["ingest"])


@router.post("", response_model=IngestionSummary)
async def trigger_ingestion(
    runner: IngestionRunner = Depends(get_runner),
) -> IngestionSummary:
    """
    Run one ingestion pass and wait for it to finish.

    Raises:
        HTTPException(409): A pass is already running
        HTTPException(503): Ledger, vector index or corpus unavailable
    """
    try:
        return await runner.run_now()
    except IngestionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except OrchestratorError as e:
        raise HTTPException(status_code=503, detail=str(e))
