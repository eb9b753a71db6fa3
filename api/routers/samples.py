from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from data.database import get_session
from data.repositories import SampleRepository

router = APIRouter(prefix="/api/samples", tags=["samples"])


def _sample_to_dict(s) -> dict:
    return {
        "date": s.partition_key,
        "hour": s.row_key,
        "viewers": s.viewers,
        "category_id": s.category_id,
        "category_name": s.category_name,
        "collected_at": s.collected_at.isoformat() if s.collected_at else None,
    }


@router.get("")
async def list_samples(
    since: str | None = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    limit: int = Query(48, ge=1, le=1000),
):
    async with get_session() as session:
        repo = SampleRepository(session)
        samples = await repo.list_samples(since=since, limit=limit)
        return [_sample_to_dict(s) for s in samples]


@router.get("/daily")
async def daily_stats(days: int = Query(7, ge=1, le=366)):
    async with get_session() as session:
        repo = SampleRepository(session)
        return await repo.daily_stats(days)


@router.get("/{date_key}/{hour_key}")
async def get_sample(date_key: str, hour_key: str):
    async with get_session() as session:
        repo = SampleRepository(session)
        sample = await repo.get(date_key, hour_key)
        if sample is None:
            raise HTTPException(404, f"No sample for {date_key} hour {hour_key}")
        return _sample_to_dict(sample)
