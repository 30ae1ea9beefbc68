# src/tally_stage/api/v1/endpoints/counters.py
"""Counter endpoints for the Tally Stage API."""

from fastapi import APIRouter, Depends, HTTPException, status

from tally_stage.core.settings import settings
from tally_stage.schemas.counter import CounterSnapshot, IncrementRequest, ResetRequest
from tally_stage.services import counter_service
from tally_stage.services.errors import InvalidIdentityError, ResetNotAllowedError

from ..dependencies import CallerDep, SessionDep, get_caller_subject

router = APIRouter(prefix="/counters", tags=["counters"])


@router.get("", response_model=CounterSnapshot)
def get_counters(db: SessionDep) -> CounterSnapshot:
    """Return today's count and the all-time count."""
    return counter_service.get_counter_snapshot(db)


@router.post(
    "/increment",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(get_caller_subject)],
)
def increment_counters(payload: IncrementRequest, db: SessionDep) -> None:
    """Add one to both counters and record the increment in the activity feed."""
    try:
        counter_service.increment_counter(db, payload.actor_identity)
    except InvalidIdentityError as err:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(err),
        ) from err


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
def reset_counters(
    db: SessionDep,
    caller: CallerDep,
    payload: ResetRequest | None = None,
) -> None:
    """Reset both counters to zero. Restricted to the administrator identity."""
    if settings.require_auth:
        requested_by = caller
    else:
        requested_by = payload.requested_by if payload else None

    try:
        counter_service.reset_counters(db, requested_by)
    except ResetNotAllowedError as err:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(err)) from err
