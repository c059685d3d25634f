"""
Pipeline trigger: sync every catalogued dataset, then transform what synced.

PipelineService owns the PipelineGuard, so at most one run is in flight per
process. A second trigger is rejected at once instead of being queued.
"""

import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.catalogue import load_repositories
from core.exceptions import PipelineAlreadyRunningError
from ingestion.runner import TransformRunner
from ingestion.sync.syncer import SyncOrchestrator
from ingestion.transformers.registry import TransformerRegistry, build_default_registry
from schemas.catalogue import DatasetDescriptor
from schemas.pipeline import (
    PipelineCounts,
    PipelineRunResult,
    SyncCounts,
    SyncSummary,
    TransformCounts,
    TransformSummary,
)

logger = logging.getLogger(__name__)


class PipelineGuard:
    """Single-slot, non-blocking run flag."""

    def __init__(self):
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    def try_acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        self._lock.release()

    @contextmanager
    def hold(self) -> Iterator[None]:
        """
        Hold the slot for the duration of a run.

        Raises:
            PipelineAlreadyRunningError: If another run holds the slot
        """
        if not self.try_acquire():
            raise PipelineAlreadyRunningError()
        try:
            yield
        finally:
            self.release()


class PipelineService:
    """
    Runs the full sync-then-transform pipeline.

    Collaborators are injectable so tests can swap the catalogue, the sync
    stage or the registry without touching a database.
    """

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker] = None,
        sync_orchestrator: Optional[SyncOrchestrator] = None,
        registry: Optional[TransformerRegistry] = None,
        catalogue_loader: Callable[[], List[DatasetDescriptor]] = load_repositories,
    ):
        if session_factory is None:
            from core.database import async_session_maker
            session_factory = async_session_maker

        self.session_factory = session_factory
        self.sync_orchestrator = sync_orchestrator or SyncOrchestrator()
        self.registry = registry if registry is not None else build_default_registry()
        self.catalogue_loader = catalogue_loader
        self.guard = PipelineGuard()

    @property
    def is_running(self) -> bool:
        return self.guard.is_running

    async def run(self) -> PipelineRunResult:
        """
        Run the pipeline once.

        Raises:
            PipelineAlreadyRunningError: If a run is already in flight
            ConfigError: If the catalogue cannot be loaded
        """
        with self.guard.hold():
            repositories = self.catalogue_loader()
            logger.info(f"Starting pipeline run for {len(repositories)} repositories")

            sync_summary = await self.sync_orchestrator.sync_all(repositories)
            self._log_sync_failures(sync_summary)

            schema_keys = [r.schema_name for r in sync_summary.results if r.status == "success"]
            transform_summary = await self._transform(schema_keys)
            self._log_transform_failures(transform_summary)

            result = PipelineRunResult(
                success=sync_summary.failed == 0 and transform_summary.failed == 0,
                summary=PipelineCounts(
                    sync=SyncCounts(
                        total=sync_summary.total,
                        succeeded=sync_summary.succeeded,
                        failed=sync_summary.failed,
                    ),
                    transform=TransformCounts(
                        total=transform_summary.total,
                        succeeded=transform_summary.succeeded,
                        failed=transform_summary.failed,
                        skipped=transform_summary.skipped,
                    ),
                ),
            )

            logger.info(f"Pipeline run completed: success={result.success}")
            return result

    async def _transform(self, schema_keys: Sequence[str]) -> TransformSummary:
        async with self.session_factory() as session:
            runner = TransformRunner(session, registry=self.registry)
            return await runner.transform_all(schema_keys)

    @staticmethod
    def _log_sync_failures(summary: SyncSummary) -> None:
        for result in summary.results:
            if result.status == "failure":
                logger.error(
                    f"Repository sync failed: {result.dataset.name} "
                    f"({result.dataset.category}): {result.error.message}"
                )

    @staticmethod
    def _log_transform_failures(summary: TransformSummary) -> None:
        for result in summary.results:
            if result.status == "failure":
                logger.error(f"Schema transform failed: {result.schema_key}: {result.error}")
