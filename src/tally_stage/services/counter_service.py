"""Global counter with lazy daily rollover.

Reads project the stored row onto "today" without touching storage; only an
increment persists a new ``last_reset_date``. Both paths share
:func:`is_current_day` so they cannot disagree about the boundary.
"""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from tally_stage.core.settings import settings
from tally_stage.db.time import calendar_day, utcnow
from tally_stage.models import GLOBAL_COUNTER_TYPE, Counter
from tally_stage.schemas.counter import CounterSnapshot
from tally_stage.services.activity_log import append_event
from tally_stage.services.errors import ResetNotAllowedError, normalize_identity
from tally_stage.services.transaction import commit_atomically

__all__ = [
    "apply_increment",
    "can_reset",
    "current_day",
    "get_counter_snapshot",
    "increment_counter",
    "is_current_day",
    "project_snapshot",
    "reset_counters",
]

logger = logging.getLogger(__name__)


def current_day(now: datetime) -> str:
    """Return the calendar day of ``now`` in the reference timezone."""
    return calendar_day(now, settings.day_boundary_timezone)


def is_current_day(counter: Counter | None, today: str) -> bool:
    return counter is not None and counter.last_reset_date == today


def project_snapshot(counter: Counter | None, today: str) -> CounterSnapshot:
    """Return the logical counts for ``today`` without mutating ``counter``."""
    if counter is None:
        return CounterSnapshot(daily_count=0, total_count=0)
    daily = counter.daily_count if is_current_day(counter, today) else 0
    return CounterSnapshot(daily_count=daily, total_count=counter.total_count)


def apply_increment(counter: Counter | None, today: str) -> Counter:
    """Return ``counter`` advanced by one increment on ``today``.

    An absent counter is created at ``{1, 1}``; a counter last reset on an
    earlier day restarts its daily count at 1.
    """
    if counter is None:
        return Counter(
            type=GLOBAL_COUNTER_TYPE,
            daily_count=1,
            total_count=1,
            last_reset_date=today,
        )
    counter.daily_count = counter.daily_count + 1 if is_current_day(counter, today) else 1
    counter.total_count = counter.total_count + 1
    counter.last_reset_date = today
    return counter


def _load_counter(db: Session, *, for_update: bool = False) -> Counter | None:
    stmt = select(Counter).where(Counter.type == GLOBAL_COUNTER_TYPE)
    if for_update:
        stmt = stmt.with_for_update()
    return db.scalars(stmt).first()


def get_counter_snapshot(db: Session, *, now: datetime | None = None) -> CounterSnapshot:
    """Return ``{daily_count, total_count}`` as seen on the current day."""
    today = current_day(now or utcnow())
    return project_snapshot(_load_counter(db), today)


def increment_counter(db: Session, actor_identity: str, *, now: datetime | None = None) -> None:
    """Increment both tallies and log the event in one transaction.

    Args:
        db: Database session.
        actor_identity: Display name credited with the increment.
        now: Moment of the call; "today" and the event timestamp derive from it.

    Raises:
        InvalidIdentityError: If ``actor_identity`` is blank.
    """
    actor = normalize_identity(actor_identity, field="actor_identity")
    moment = now or utcnow()
    today = current_day(moment)

    def _work() -> tuple[int, int]:
        counter = apply_increment(_load_counter(db, for_update=True), today)
        db.add(counter)
        append_event(db, actor, moment)
        return counter.daily_count, counter.total_count

    daily, total = commit_atomically(db, _work, label="increment")
    logger.info("Counter incremented by %s (daily=%d, total=%d, day=%s)", actor, daily, total, today)


def can_reset(requested_by: str | None) -> bool:
    """Return True if ``requested_by`` is the configured admin identity."""
    admin = (settings.admin_identity or "").strip()
    if not admin or requested_by is None:
        return False
    return requested_by.strip() == admin


def reset_counters(db: Session, requested_by: str | None) -> None:
    """Delete the counter row so the next read reports ``{0, 0}``.

    The activity log is left untouched.

    Raises:
        ResetNotAllowedError: If ``requested_by`` is not the admin identity.
    """
    if not can_reset(requested_by):
        logger.warning("Counter reset refused for %r", requested_by)
        raise ResetNotAllowedError("Only the administrator can reset the counters")

    def _work() -> int:
        result = db.execute(delete(Counter).where(Counter.type == GLOBAL_COUNTER_TYPE))
        return int(result.rowcount or 0)

    removed = commit_atomically(db, _work, label="reset")
    logger.info("Counters reset by %s (rows removed: %d)", requested_by, removed)
