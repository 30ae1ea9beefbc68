# src/tally_stage/api/v1/endpoints/presence.py
"""Presence endpoints for the Tally Stage API."""

from fastapi import APIRouter, HTTPException, status

from tally_stage.core.settings import settings
from tally_stage.schemas.presence import HeartbeatRequest, PresenceOut
from tally_stage.services import presence_service
from tally_stage.services.errors import InvalidIdentityError

from ..dependencies import CallerDep, SessionDep

router = APIRouter(prefix="/presence", tags=["presence"])


@router.post("/heartbeat", status_code=status.HTTP_204_NO_CONTENT)
def heartbeat(payload: HeartbeatRequest, db: SessionDep, caller: CallerDep) -> None:
    """Mark the caller as online.

    With authentication enabled the token subject is the presence key and
    ``identity`` is only the display name, so renames need no cleanup.
    """
    try:
        if settings.require_auth and caller is not None:
            presence_service.heartbeat(db, caller, name=payload.identity)
        else:
            presence_service.heartbeat(db, payload.identity, payload.previous_identity)
    except InvalidIdentityError as err:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(err),
        ) from err


@router.get("/online", response_model=list[PresenceOut])
def get_online(db: SessionDep) -> list[PresenceOut]:
    """List identities seen within the online window."""
    return [PresenceOut.model_validate(r) for r in presence_service.get_online_identities(db)]
