from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.exc import SQLAlchemyError

from collectors.collector import ViewerCollector
from config.settings import settings
from core.models import CollectorConfig, CollectResult
from data.database import get_session
from data.repositories import CollectLogRepository, SampleRepository

log = logging.getLogger(__name__)

JOB_ID = "collect_viewers"


class CollectScheduler:
    """Triggers a viewer collection on a cron schedule and persists the outcome."""

    def __init__(
        self,
        collector: ViewerCollector | None = None,
        *,
        config: CollectorConfig | None = None,
        session_scope=get_session,
    ) -> None:
        self._collector = collector or ViewerCollector()
        self._config = config
        self._session_scope = session_scope
        self._scheduler = AsyncIOScheduler(timezone=timezone.utc)

    def start(self) -> None:
        self._scheduler.add_job(
            self._run_collector,
            CronTrigger.from_crontab(settings.COLLECT_CRONTAB, timezone=timezone.utc),
            id=JOB_ID,
            replace_existing=True,
        )
        if settings.COLLECT_ON_STARTUP:
            self._scheduler.add_job(
                self._run_collector,
                "date",
                run_date=datetime.now(timezone.utc),
                id=f"{JOB_ID}_init",
            )
        self._scheduler.start()
        log.info("Collect scheduler started with crontab %r", settings.COLLECT_CRONTAB)

    def stop(self) -> None:
        self._scheduler.shutdown(wait=False)

    async def run_now(self) -> CollectResult:
        """Manually trigger a collection outside the schedule."""
        return await self._run_collector()

    def get_status(self) -> dict:
        jobs = []
        for job in self._scheduler.get_jobs():
            jobs.append(
                {
                    "id": job.id,
                    "next_run": job.next_run_time.isoformat()
                    if job.next_run_time
                    else None,
                }
            )
        return {"running": self._scheduler.running, "jobs": jobs}

    async def _run_collector(self) -> CollectResult:
        started_at = datetime.now(timezone.utc)
        log.info("Viewer collection triggered at %s", started_at.isoformat())

        config = self._config or CollectorConfig.from_settings(settings)
        result = await self._collector.collect(config)

        try:
            async with self._session_scope() as session:
                if result.sample is not None:
                    await SampleRepository(session).upsert(result.sample)
                await CollectLogRepository(session).log_run(
                    category_name=result.category_name,
                    status=result.status,
                    viewers=result.viewers,
                    error_message=result.error,
                    duration_seconds=result.duration_seconds,
                    started_at=started_at,
                )
        except SQLAlchemyError as e:
            log.error("Failed to persist viewer sample for %r: %s", result.category_name, e)
            result = replace(result, status="failed", sample=None, error=f"persist: {e}")

        log.info(
            "Finished viewer collection: %r | %s | viewers=%s | %.1fs",
            result.category_name,
            result.status,
            result.viewers,
            result.duration_seconds,
        )
        return result
