"""Read-model assembly for clients that poll everything at once."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from tally_stage.db.time import to_millis, utcnow
from tally_stage.schemas.activity import ActivityEventOut
from tally_stage.schemas.board import BoardSnapshot
from tally_stage.schemas.presence import PresenceOut
from tally_stage.services.activity_log import get_recent_events
from tally_stage.services.counter_service import get_counter_snapshot
from tally_stage.services.presence_service import get_online_identities


def get_board_snapshot(
    db: Session,
    *,
    limit: int | None = None,
    now: datetime | None = None,
) -> BoardSnapshot:
    """Combine counter, online set and recent activity evaluated at one moment."""
    moment = now or utcnow()
    return BoardSnapshot(
        counter=get_counter_snapshot(db, now=moment),
        online=[PresenceOut.model_validate(r) for r in get_online_identities(db, now=moment)],
        recent_events=[
            ActivityEventOut.model_validate(e)
            for e in get_recent_events(db, limit, now=moment)
        ],
        generated_at=to_millis(moment),
    )
