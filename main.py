"""Twitch Viewer Collector entry point."""

from __future__ import annotations

import logging

import uvicorn

from api.app import create_app
from api.routers.collector_control import set_scheduler
from collectors.scheduler import CollectScheduler
from config.settings import settings
from data.database import init_db

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
log = logging.getLogger(__name__)

app = create_app()


@app.on_event("startup")
async def on_startup() -> None:
    log.info("Initialising database…")
    await init_db()

    log.info("Starting collect scheduler…")
    scheduler = CollectScheduler()
    app.state.scheduler = scheduler
    set_scheduler(scheduler)
    scheduler.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    if hasattr(app.state, "scheduler"):
        app.state.scheduler.stop()
        log.info("Collect scheduler stopped.")


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.API_PORT,
        reload=False,
    )
