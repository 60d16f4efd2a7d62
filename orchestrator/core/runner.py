"""
Ingestion runner.

Runs the startup pass, on-demand passes and the optional periodic
re-scan, and keeps IngestionHealth up to date.

Dependencies: asyncio, orchestrator.core
System role: Ingestion lifecycle management
"""

import asyncio
import logging

from orchestrator.core.exceptions import IngestionInProgressError
from orchestrator.core.health import IngestionHealth
from orchestrator.core.indexer import Indexer
from orchestrator.models.ingestion import IngestionSummary
from orchestrator.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class IngestionRunner:
    """Drives Indexer passes and records their outcome."""

    def __init__(
        self,
        indexer: Indexer,
        health: IngestionHealth,
        enabled: bool = True,
        fail_on_error: bool = True,
        rescan_interval_seconds: float | None = None,
    ) -> None:
        """
        Initialize runner.

        Args:
            indexer: Indexer to drive
            health: Health state to update after each pass
            enabled: Run the startup pass at all
            fail_on_error: Raise from run_startup instead of only marking unhealthy
            rescan_interval_seconds: Period of background re-scans (None disables)
        """
        self._indexer = indexer
        self._health = health
        self._enabled = enabled
        self._fail_on_error = fail_on_error
        self._rescan_interval = rescan_interval_seconds
        self._rescan_task: asyncio.Task | None = None

    async def run_startup(self) -> IngestionSummary | None:
        """
        Run the startup ingestion pass.

        Returns:
            IngestionSummary | None: Summary, or None when disabled or failed
                with fail_on_error off

        Raises:
            Exception: The pass failed and fail_on_error is set
        """
        if not self._enabled:
            logger.info(f"{__name__}:run_startup - Ingestion disabled, skipping startup pass")
            return None

        try:
            return await self.run_now()
        except Exception:
            if self._fail_on_error:
                raise
            logger.warning(f"{__name__}:run_startup - Continuing startup with degraded ingestion")
            return None

    async def run_now(self) -> IngestionSummary:
        """
        Run one pass and update health.

        Raises:
            IngestionInProgressError: A pass is already running (health unchanged)
            Exception: The pass failed (health marked DOWN)
        """
        try:
            summary = await self._indexer.run_once()
        except IngestionInProgressError:
            raise
        except Exception as e:
            self._health.mark_unhealthy(e)
            log_exception_with_context(logger, f"{__name__}:run_now - Ingestion pass failed", e)
            raise
        self._health.mark_healthy(summary)
        return summary

    def start_rescan(self) -> asyncio.Task | None:
        """Start the periodic re-scan loop if an interval is configured."""
        if not self._rescan_interval or self._rescan_task is not None:
            return self._rescan_task
        self._rescan_task = asyncio.create_task(self._rescan_loop())
        logger.info(f"{__name__}:start_rescan - Re-scanning every {self._rescan_interval}s")
        return self._rescan_task

    async def stop_rescan(self) -> None:
        """Cancel the re-scan loop and wait for it to finish."""
        if self._rescan_task is None:
            return
        self._rescan_task.cancel()
        try:
            await self._rescan_task
        except asyncio.CancelledError:
            pass
        self._rescan_task = None

    async def _rescan_loop(self) -> None:
        while True:
            await asyncio.sleep(self._rescan_interval)
            try:
                await self.run_now()
            except IngestionInProgressError:
                logger.info(f"{__name__}:_rescan_loop - Pass already running, skipping re-scan")
            except Exception:
                # already recorded in health by run_now
                continue
