"""System endpoints for Tally Stage."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from tally_stage.core.settings import settings
from tally_stage.db.time import to_millis, utcnow

from ..dependencies import SessionDep

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "counter": {
            "day_boundary_timezone": settings.day_boundary_timezone,
        },
        "presence": {
            "online_window_seconds": settings.online_window_seconds,
        },
        "activity": {
            "window_seconds": settings.activity_window_seconds,
            "default_limit": settings.activity_default_limit,
            "max_limit": settings.activity_max_limit,
        },
        "auth": {
            "required": settings.require_auth,
            "reset_enabled": bool(settings.admin_identity),
        },
    }


@router.get("/health")
def get_system_health(db: SessionDep) -> dict[str, object]:
    """Health check that also verifies database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {e}"

    return {
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "timestamp": to_millis(utcnow()),
        "components": {"database": db_status},
        "version": settings.app_version,
    }
