import logging
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from core.config import settings
from core.exceptions import PipelineAlreadyRunningError
from ingestion.pipeline import PipelineService

logger = logging.getLogger(__name__)


class PipelineScheduler:
    """Fires the pipeline on an interval; runs share the service's guard."""

    def __init__(self, service: PipelineService, interval_minutes: Optional[int] = None):
        self.service = service
        self.interval_minutes = interval_minutes if interval_minutes is not None else settings.SYNC_INTERVAL_MINUTES
        self.scheduler = AsyncIOScheduler()

    @property
    def enabled(self) -> bool:
        return bool(self.interval_minutes)

    async def run_pipeline_job(self):
        """Job to run the pipeline"""
        logger.info("Scheduler: Starting pipeline run")
        try:
            result = await self.service.run()
            logger.info(f"Scheduler: Pipeline run finished (success={result.success})")
        except PipelineAlreadyRunningError:
            logger.info("Scheduler: Pipeline already running, skipping this interval")
        except Exception as e:
            logger.error(f"Scheduler: Pipeline run failed - {e}")

    def start(self):
        """Start the scheduler (no-op when no interval is configured)"""
        if not self.enabled:
            logger.info("Pipeline scheduler disabled (SYNC_INTERVAL_MINUTES not set)")
            return
        self.scheduler.add_job(
            self.run_pipeline_job,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id="pipeline_job",
            replace_existing=True,
            max_instances=1,
        )
        self.scheduler.start()
        logger.info(f"Pipeline scheduler started (every {self.interval_minutes} minutes)")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Pipeline scheduler stopped")
