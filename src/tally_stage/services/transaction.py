"""Commit helper shared by the write services."""
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tally_stage.db.session import begin_write

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Two concurrent first writers can race on the same primary key; the loser
# sees IntegrityError and succeeds on the next pass once the row exists.
DEFAULT_ATTEMPTS = 3


def commit_atomically(
    db: Session,
    work: Callable[[], T],
    *,
    label: str,
    attempts: int = DEFAULT_ATTEMPTS,
) -> T:
    """Run ``work`` in a write transaction and commit it.

    Each attempt starts a fresh write transaction, ending any read
    transaction the session still holds. Any failure rolls the session back
    so no partial state survives. ``IntegrityError`` is retried up to
    ``attempts`` times; everything else propagates immediately.
    """
    attempt = 1
    while True:
        try:
            begin_write(db)
            result = work()
            db.commit()
        except IntegrityError:
            db.rollback()
            if attempt >= attempts:
                raise
            logger.warning("%s hit a key conflict, retrying (attempt %d)", label, attempt)
            attempt += 1
        except Exception:
            db.rollback()
            raise
        else:
            return result
