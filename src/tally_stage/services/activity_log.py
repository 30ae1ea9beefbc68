"""Append-only activity log backing the notification feed.

Events are only ever written by :func:`tally_stage.services.counter_service.increment_counter`
so every row corresponds to exactly one successful increment.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from tally_stage.core.settings import settings
from tally_stage.db.time import to_millis, utcnow
from tally_stage.models import ActivityEvent
from tally_stage.models.activity import INCREMENT_ACTION
from tally_stage.services.transaction import commit_atomically

__all__ = ["append_event", "get_recent_events", "prune_events"]

logger = logging.getLogger(__name__)


def append_event(db: Session, actor_identity: str, now: datetime) -> ActivityEvent:
    """Stage an event inside the caller's transaction.

    The timestamp is ``now`` in epoch milliseconds, bumped past the newest
    existing event when needed so timestamps stay strictly increasing.
    The caller commits.
    """
    now_ms = to_millis(now)
    latest = db.scalar(select(func.max(ActivityEvent.timestamp)))
    timestamp = now_ms if latest is None else max(now_ms, int(latest) + 1)

    event = ActivityEvent(
        actor_identity=actor_identity,
        action=INCREMENT_ACTION,
        timestamp=timestamp,
    )
    db.add(event)
    return event


def get_recent_events(
    db: Session,
    limit: int | None = None,
    since_millis: int | None = None,
    *,
    now: datetime | None = None,
) -> list[ActivityEvent]:
    """Return up to ``limit`` events newer than ``since_millis``, newest first.

    Args:
        db: Database session.
        limit: Maximum number of events; defaults to ``ACTIVITY_DEFAULT_LIMIT``.
        since_millis: Exclusive lower bound in epoch milliseconds; defaults to
            ``now`` minus ``ACTIVITY_WINDOW_SECONDS``.
        now: Moment the read is evaluated at.

    Raises:
        ValueError: If ``limit`` is smaller than one.
    """
    if limit is None:
        limit = settings.activity_default_limit
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if since_millis is None:
        since_millis = to_millis(now or utcnow()) - settings.activity_window_ms

    stmt = (
        select(ActivityEvent)
        .where(ActivityEvent.timestamp > since_millis)
        .order_by(ActivityEvent.timestamp.desc(), ActivityEvent.id.desc())
        .limit(limit)
    )
    return list(db.scalars(stmt))


def prune_events(db: Session, older_than_seconds: int, *, now: datetime | None = None) -> int:
    """Delete events older than the retention window and return how many went."""
    cutoff = to_millis(now or utcnow()) - older_than_seconds * 1000

    def _work() -> int:
        result = db.execute(delete(ActivityEvent).where(ActivityEvent.timestamp < cutoff))
        return int(result.rowcount or 0)

    removed = commit_atomically(db, _work, label="activity prune")
    if removed:
        logger.info("Pruned %d activity events older than %d", removed, cutoff)
    return removed
