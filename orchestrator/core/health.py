"""
Ingestion health state.

Records the outcome of the latest ingestion pass for the health endpoint.

Dependencies: pydantic
System role: Ingestion status reporting
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel

from orchestrator.models.ingestion import IngestionSummary


class HealthStatus(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    UNKNOWN = "UNKNOWN"


class HealthSnapshot(BaseModel):
    """Point-in-time view of ingestion health."""

    status: HealthStatus
    last_run_at: datetime | None = None
    processed: int | None = None
    skipped: int | None = None
    deleted: int | None = None
    failed: int | None = None
    total_chunks: int | None = None
    error: str | None = None


class IngestionHealth:
    """
    Mutable holder of the last ingestion outcome.

    Starts UNKNOWN until the first pass finishes.
    """

    def __init__(self) -> None:
        self._snapshot = HealthSnapshot(status=HealthStatus.UNKNOWN)

    def mark_healthy(self, summary: IngestionSummary) -> None:
        """Record a completed pass."""
        self._snapshot = HealthSnapshot(
            status=HealthStatus.UP,
            last_run_at=summary.finished_at or datetime.now(timezone.utc),
            processed=summary.processed,
            skipped=summary.skipped,
            deleted=summary.deleted,
            failed=summary.failed,
            total_chunks=summary.total_chunks,
        )

    def mark_unhealthy(self, error: BaseException | str) -> None:
        """Record a failed pass."""
        self._snapshot = HealthSnapshot(
            status=HealthStatus.DOWN,
            last_run_at=datetime.now(timezone.utc),
            error=str(error),
        )

    def snapshot(self) -> HealthSnapshot:
        return self._snapshot.model_copy()
