from __future__ import annotations

from fastapi import APIRouter, Query

from data.database import get_session
from data.repositories import CollectLogRepository

router = APIRouter(prefix="/api/runs", tags=["runs"])


@router.get("")
async def recent_runs(limit: int = Query(20, ge=1, le=100)):
    async with get_session() as session:
        repo = CollectLogRepository(session)
        runs = await repo.recent_runs(limit=limit)
        return [
            {
                "id": r.id,
                "category_name": r.category_name,
                "status": r.status,
                "viewers": r.viewers,
                "error_message": r.error_message,
                "duration_seconds": r.duration_seconds,
                "started_at": r.started_at.isoformat() if r.started_at else None,
                "finished_at": r.finished_at.isoformat() if r.finished_at else None,
            }
            for r in runs
        ]


@router.get("/stats")
async def run_stats():
    async with get_session() as session:
        repo = CollectLogRepository(session)
        return await repo.run_stats()
