from __future__ import annotations

import logging

from fastapi import FastAPI

from api.routers import collector_control, runs, samples

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Twitch Viewer Collector", version="0.1.0")

    # Register API routers
    app.include_router(samples.router)
    app.include_router(runs.router)
    app.include_router(collector_control.router)

    # Health check
    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
