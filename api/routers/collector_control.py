from __future__ import annotations

from fastapi import APIRouter, HTTPException

router = APIRouter(prefix="/api/collector", tags=["collector"])

# The scheduler reference is injected by main.py at startup
_scheduler = None


def set_scheduler(scheduler) -> None:
    global _scheduler
    _scheduler = scheduler


@router.post("/run")
async def trigger_collection():
    if _scheduler is None:
        raise HTTPException(503, "Scheduler not initialized")

    result = await _scheduler.run_now()
    return {
        "status": result.status,
        "category_name": result.category_name,
        "category_id": result.category_id,
        "viewers": result.viewers,
        "error": result.error,
        "duration_seconds": round(result.duration_seconds, 2),
    }


@router.get("/status")
async def scheduler_status():
    if _scheduler is None:
        return {"running": False, "jobs": []}
    return _scheduler.get_status()
