# src/tally_stage/api/v1/endpoints/board.py
"""Combined snapshot endpoint for polling clients."""

from typing import Annotated

from fastapi import APIRouter, Query

from tally_stage.core.settings import settings
from tally_stage.schemas.board import BoardSnapshot
from tally_stage.services.board import get_board_snapshot

from ..dependencies import SessionDep

router = APIRouter(prefix="/board", tags=["board"])


@router.get("", response_model=BoardSnapshot)
def get_board(
    db: SessionDep,
    limit: Annotated[int | None, Query(ge=1, le=settings.activity_max_limit)] = None,
) -> BoardSnapshot:
    """Return counters, online identities and recent activity in one payload."""
    return get_board_snapshot(db, limit=limit)
