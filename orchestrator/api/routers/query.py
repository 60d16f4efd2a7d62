"""
Query API endpoint.

Routes: POST /query

Dependencies: fastapi, orchestrator.core.retriever
System role: Context retrieval HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from orchestrator.api.deps import get_retriever
from orchestrator.core.exceptions import (
    EmbeddingUnavailableError,
    InvalidInputError,
    StorageUnavailableError,
)
from orchestrator.core.retriever import Retriever
from orchestrator.models.query import QueryRequest, QueryResponse

router = APIRouter(prefix="/query", tags=["query"])


@router.post("", response_model=QueryResponse)
async def query_context(
    request: QueryRequest,
    retriever: Retriever = Depends(get_retriever),
) -> QueryResponse:
    """
    Retrieve the chunks most relevant to a question.

    Args:
        request: Question and result limit (1..20)
        retriever: Injected Retriever

    Returns:
        QueryResponse: Matches best first, index size and elapsed time

    Raises:
        HTTPException(422): Blank question or max_results out of range
        HTTPException(503): Embedding provider or vector index unavailable
    """
    try:
        return await retriever.query(request.question, request.max_results)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (EmbeddingUnavailableError, StorageUnavailableError) as e:
        raise HTTPException(status_code=503, detail=str(e))
