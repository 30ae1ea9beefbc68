"""Presence tracking based on periodic heartbeats.

Expiry is passive: records outside the online window are filtered out on
read. :func:`sweep_presence` removes long-stale rows for housekeeping only.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from tally_stage.core.settings import settings
from tally_stage.db.time import to_millis, utcnow
from tally_stage.models import PresenceRecord
from tally_stage.services.errors import normalize_identity
from tally_stage.services.transaction import commit_atomically

__all__ = ["get_online_identities", "heartbeat", "sweep_presence"]

logger = logging.getLogger(__name__)


def heartbeat(
    db: Session,
    identity: str,
    previous_identity: str | None = None,
    *,
    name: str | None = None,
    now: datetime | None = None,
) -> PresenceRecord:
    """Refresh ``last_seen`` for ``identity``, creating the record if needed.

    Args:
        db: Database session.
        identity: Presence key (display name, or token subject when authenticated).
        previous_identity: Former key after a rename; its record is deleted.
            A missing record is not an error.
        name: Display name when it differs from the key; defaults to ``identity``.
        now: Moment of the heartbeat.

    Raises:
        InvalidIdentityError: If ``identity`` or ``name`` is blank.
    """
    key = normalize_identity(identity)
    display_name = key if name is None else normalize_identity(name, field="name")
    previous = previous_identity.strip() if previous_identity else None
    now_ms = to_millis(now or utcnow())

    def _work() -> PresenceRecord:
        if previous and previous != key:
            removed = db.execute(
                delete(PresenceRecord).where(PresenceRecord.identity == previous)
            ).rowcount
            if removed:
                logger.info("Presence renamed from %s to %s", previous, key)

        record = db.get(PresenceRecord, key, with_for_update=True)
        if record is None:
            record = PresenceRecord(identity=key, name=display_name, last_seen=now_ms)
            db.add(record)
        else:
            record.name = display_name
            record.last_seen = now_ms
        return record

    record = commit_atomically(db, _work, label="heartbeat")
    logger.debug("Heartbeat from %s at %d", key, now_ms)
    return record


def get_online_identities(db: Session, *, now: datetime | None = None) -> list[PresenceRecord]:
    """Return records whose last heartbeat is within the online window.

    Callers must not rely on the order of the result.
    """
    cutoff = to_millis(now or utcnow()) - settings.online_window_ms
    stmt = (
        select(PresenceRecord)
        .where(PresenceRecord.last_seen >= cutoff)
        .order_by(PresenceRecord.identity)
    )
    return list(db.scalars(stmt))


def sweep_presence(
    db: Session,
    older_than_seconds: int | None = None,
    *,
    now: datetime | None = None,
) -> int:
    """Delete records idle for longer than the retention period."""
    if older_than_seconds is None:
        older_than_seconds = settings.presence_retention_seconds
    # Never sweep anything the online view could still report.
    window_ms = max(older_than_seconds * 1000, settings.online_window_ms)
    cutoff = to_millis(now or utcnow()) - window_ms

    def _work() -> int:
        result = db.execute(delete(PresenceRecord).where(PresenceRecord.last_seen < cutoff))
        return int(result.rowcount or 0)

    removed = commit_atomically(db, _work, label="presence sweep")
    if removed:
        logger.info("Swept %d stale presence records", removed)
    return removed
