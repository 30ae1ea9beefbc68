# src/tally_stage/main.py
"""Main entry point for the Tally Stage application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from tally_stage.api.v1 import (
    activity_router,
    board_router,
    counters_router,
    presence_router,
    system_router,
)
from tally_stage.core.settings import settings
from tally_stage.db.session import create_tables
from tally_stage.services.maintenance import MaintenanceWorker

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Tally Stage API",
    description="Shared counter with daily rollover, presence and an activity feed",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(counters_router, prefix="/api/v1")
app.include_router(presence_router, prefix="/api/v1")
app.include_router(activity_router, prefix="/api/v1")
app.include_router(board_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    if settings.auto_create_tables:
        create_tables()
    if settings.maintenance_enabled:
        worker = MaintenanceWorker()
        await worker.start()
        app.state.maintenance_worker = worker
        logger.info(
            "Maintenance worker started (every %.1fs)", settings.maintenance_interval_seconds
        )
    else:
        app.state.maintenance_worker = None


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: MaintenanceWorker | None = getattr(app.state, "maintenance_worker", None)
    if worker:
        await worker.stop()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "tally_stage.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
