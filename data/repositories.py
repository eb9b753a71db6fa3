from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import Integer, cast, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_upsert
from sqlalchemy.ext.asyncio import AsyncSession

from core.models import ViewerSample
from data.schema import DBCollectRun, DBViewerSample

# ── SampleRepository ─────────────────────────────────────────────────


class SampleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._s = session

    async def upsert(self, sample: ViewerSample) -> None:
        """Write a sample, replacing any earlier one for the same date and hour."""
        stmt = (
            sqlite_upsert(DBViewerSample)
            .values(
                partition_key=sample.date_key,
                row_key=sample.hour_key,
                viewers=sample.viewers,
                category_id=sample.category_id,
                category_name=sample.category_name,
                collected_at=sample.collected_at,
            )
            .on_conflict_do_update(
                index_elements=["partition_key", "row_key"],
                set_={
                    "viewers": sample.viewers,
                    "category_id": sample.category_id,
                    "category_name": sample.category_name,
                    "collected_at": sample.collected_at,
                },
            )
        )
        await self._s.execute(stmt)

    async def get(self, date_key: str, hour_key: str) -> DBViewerSample | None:
        q = select(DBViewerSample).where(
            DBViewerSample.partition_key == date_key,
            DBViewerSample.row_key == hour_key,
        )
        return await self._s.scalar(q)

    async def list_samples(
        self, *, since: str | None = None, limit: int = 48
    ) -> list[DBViewerSample]:
        q = select(DBViewerSample)
        if since:
            q = q.where(DBViewerSample.partition_key >= since)
        q = q.order_by(DBViewerSample.collected_at.desc()).limit(limit)
        result = await self._s.execute(q)
        return list(result.scalars().all())

    async def daily_stats(self, days: int = 7) -> list[dict]:
        """Per-day sample count, peak and average viewers, oldest day first."""
        since = (datetime.now(timezone.utc) - timedelta(days=days - 1)).strftime(
            "%Y-%m-%d"
        )
        q = (
            select(
                DBViewerSample.partition_key,
                func.count(DBViewerSample.id),
                func.max(DBViewerSample.viewers),
                func.avg(DBViewerSample.viewers),
            )
            .where(DBViewerSample.partition_key >= since)
            .group_by(DBViewerSample.partition_key)
            .order_by(DBViewerSample.partition_key)
        )
        rows = (await self._s.execute(q)).all()
        return [
            {
                "date": r[0],
                "samples": r[1],
                "peak_viewers": r[2] or 0,
                "avg_viewers": round(r[3] or 0, 1),
            }
            for r in rows
        ]


# ── CollectLogRepository ─────────────────────────────────────────────


class CollectLogRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._s = session

    async def log_run(
        self,
        *,
        category_name: str,
        status: str,
        viewers: int | None,
        error_message: str,
        duration_seconds: float,
        started_at: datetime,
    ) -> None:
        run = DBCollectRun(
            category_name=category_name,
            status=status,
            viewers=viewers,
            error_message=error_message[:500],
            duration_seconds=round(duration_seconds, 2),
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
        )
        self._s.add(run)

    async def recent_runs(self, limit: int = 20) -> list[DBCollectRun]:
        q = (
            select(DBCollectRun)
            .order_by(DBCollectRun.started_at.desc(), DBCollectRun.id.desc())
            .limit(limit)
        )
        result = await self._s.execute(q)
        return list(result.scalars().all())

    async def run_stats(self) -> dict:
        """Total runs, success rate and the most recent run/success times."""
        q = select(
            func.count(DBCollectRun.id),
            func.sum(cast(DBCollectRun.status == "success", Integer)),
            func.max(DBCollectRun.started_at),
        )
        total, successes, last_run = (await self._s.execute(q)).one()
        last_success = await self._s.scalar(
            select(func.max(DBCollectRun.started_at)).where(
                DBCollectRun.status == "success"
            )
        )
        return {
            "total_runs": total or 0,
            "success_rate": round((successes or 0) / max(total or 0, 1) * 100, 0),
            "last_run": last_run.isoformat() if last_run else None,
            "last_success": last_success.isoformat() if last_success else None,
        }
