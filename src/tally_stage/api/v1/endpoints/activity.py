# src/tally_stage/api/v1/endpoints/activity.py
"""Activity feed endpoints for the Tally Stage API."""

from typing import Annotated

from fastapi import APIRouter, Query

from tally_stage.core.settings import settings
from tally_stage.schemas.activity import ActivityEventOut
from tally_stage.services import activity_log

from ..dependencies import SessionDep

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("/recent", response_model=list[ActivityEventOut])
def get_recent_activity(
    db: SessionDep,
    limit: Annotated[int | None, Query(ge=1, le=settings.activity_max_limit)] = None,
    since: Annotated[
        int | None,
        Query(ge=0, description="Only return events strictly newer than this epoch-ms value"),
    ] = None,
) -> list[ActivityEventOut]:
    """Return the most recent increments, newest first."""
    events = activity_log.get_recent_events(db, limit, since)
    return [ActivityEventOut.model_validate(e) for e in events]
