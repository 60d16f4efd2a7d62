"""
Test suite for IngestionRunner and IngestionHealth.

System role: Verification of startup ingestion and health reporting
"""

import asyncio
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from orchestrator.boundary.vdb.memory_store import InMemoryVectorIndex
from orchestrator.core.exceptions import IngestionInProgressError, StorageUnavailableError
from orchestrator.core.health import HealthStatus, IngestionHealth
from orchestrator.core.indexer import Indexer
from orchestrator.core.runner import IngestionRunner
from orchestrator.models.ingestion import IngestionSummary


@pytest.fixture
def health() -> IngestionHealth:
    return IngestionHealth()


@pytest.fixture
def failing_indexer() -> AsyncMock:
    """Indexer whose pass fails with a storage error."""
    indexer = AsyncMock(spec=Indexer)
    indexer.run_once.side_effect = StorageUnavailableError("Source ledger unavailable", operation="all")
    return indexer


class TestIngestionHealth:
    """Test suite for health state transitions."""

    def test_initial_state_should_be_unknown(self, health: IngestionHealth) -> None:
        assert health.snapshot().status == HealthStatus.UNKNOWN

    def test_mark_healthy_should_copy_counts(self, health: IngestionHealth) -> None:
        health.mark_healthy(IngestionSummary(processed=2, skipped=1, total_chunks=7))

        snapshot = health.snapshot()
        assert snapshot.status == HealthStatus.UP
        assert snapshot.processed == 2
        assert snapshot.total_chunks == 7
        assert snapshot.last_run_at is not None
        assert snapshot.error is None

    def test_mark_unhealthy_should_record_error(self, health: IngestionHealth) -> None:
        health.mark_healthy(IngestionSummary(processed=1))

        health.mark_unhealthy(StorageUnavailableError("db gone"))

        snapshot = health.snapshot()
        assert snapshot.status == HealthStatus.DOWN
        assert snapshot.error == "db gone"
        assert snapshot.processed is None


class TestIngestionRunnerStartup:
    """Test suite for run_startup()."""

    @pytest.mark.asyncio
    async def test_startup_should_index_and_mark_healthy(
        self, make_indexer: Callable[..., Indexer], health: IngestionHealth
    ) -> None:
        # Arrange
        runner = IngestionRunner(make_indexer(InMemoryVectorIndex()), health)

        # Act
        summary = await runner.run_startup()

        # Assert
        assert summary.processed == 3
        assert health.snapshot().status == HealthStatus.UP

    @pytest.mark.asyncio
    async def test_disabled_startup_should_not_run(
        self, failing_indexer: AsyncMock, health: IngestionHealth
    ) -> None:
        runner = IngestionRunner(failing_indexer, health, enabled=False)

        assert await runner.run_startup() is None
        failing_indexer.run_once.assert_not_called()
        assert health.snapshot().status == HealthStatus.UNKNOWN

    @pytest.mark.asyncio
    async def test_failure_should_raise_when_fail_on_error(
        self, failing_indexer: AsyncMock, health: IngestionHealth
    ) -> None:
        runner = IngestionRunner(failing_indexer, health, fail_on_error=True)

        with pytest.raises(StorageUnavailableError):
            await runner.run_startup()
        assert health.snapshot().status == HealthStatus.DOWN

    @pytest.mark.asyncio
    async def test_failure_should_degrade_when_not_fail_on_error(
        self, failing_indexer: AsyncMock, health: IngestionHealth
    ) -> None:
        """Test the service keeps starting with ingestion marked DOWN."""
        runner = IngestionRunner(failing_indexer, health, fail_on_error=False)

        assert await runner.run_startup() is None
        snapshot = health.snapshot()
        assert snapshot.status == HealthStatus.DOWN
        assert "Source ledger unavailable" in snapshot.error

    @pytest.mark.asyncio
    async def test_unexpected_error_should_degrade_when_not_fail_on_error(
        self, health: IngestionHealth
    ) -> None:
        indexer = AsyncMock(spec=Indexer)
        indexer.run_once.side_effect = RuntimeError("index file unreadable")
        runner = IngestionRunner(indexer, health, fail_on_error=False)

        assert await runner.run_startup() is None
        assert health.snapshot().status == HealthStatus.DOWN

    @pytest.mark.asyncio
    async def test_pass_in_progress_should_not_change_health(self, health: IngestionHealth) -> None:
        indexer = AsyncMock(spec=Indexer)
        indexer.run_once.side_effect = IngestionInProgressError("busy")
        runner = IngestionRunner(indexer, health)

        with pytest.raises(IngestionInProgressError):
            await runner.run_now()
        assert health.snapshot().status == HealthStatus.UNKNOWN


class TestIngestionRunnerRescan:
    """Test suite for the periodic re-scan loop."""

    @pytest.mark.asyncio
    async def test_rescan_should_not_start_without_interval(
        self, failing_indexer: AsyncMock, health: IngestionHealth
    ) -> None:
        runner = IngestionRunner(failing_indexer, health)

        assert runner.start_rescan() is None

    @pytest.mark.asyncio
    async def test_rescan_should_run_passes_until_stopped(self, health: IngestionHealth) -> None:
        """Test the loop keeps running passes and survives failures."""
        # Arrange
        indexer = AsyncMock(spec=Indexer)
        indexer.run_once.side_effect = [
            StorageUnavailableError("flaky"),
            IngestionSummary(processed=1),
            IngestionSummary(),
            IngestionSummary(),
            IngestionSummary(),
        ]
        runner = IngestionRunner(indexer, health, rescan_interval_seconds=0.01)

        # Act
        task = runner.start_rescan()
        while indexer.run_once.await_count < 2:
            await asyncio.sleep(0.01)
        await runner.stop_rescan()

        # Assert
        assert task.cancelled()
        assert health.snapshot().status == HealthStatus.UP

    @pytest.mark.asyncio
    async def test_rescan_should_survive_unexpected_errors(self, health: IngestionHealth) -> None:
        """Test a non-domain failure marks health DOWN and keeps the loop alive."""
        # Arrange
        indexer = AsyncMock(spec=Indexer)
        indexer.run_once.side_effect = RuntimeError("faiss add failed")
        runner = IngestionRunner(indexer, health, rescan_interval_seconds=0.01)

        # Act
        task = runner.start_rescan()
        while indexer.run_once.await_count < 3:
            await asyncio.sleep(0.01)
        still_running = not task.done()
        await runner.stop_rescan()

        # Assert
        assert still_running
        snapshot = health.snapshot()
        assert snapshot.status == HealthStatus.DOWN
        assert snapshot.error == "faiss add failed"
