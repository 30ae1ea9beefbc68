# src/tally_stage/models/activity.py
"""Append-only activity log entries."""

from sqlalchemy import BigInteger, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tally_stage.db.session import Base

INCREMENT_ACTION = "incremented counter"


class ActivityEvent(Base):
    """One successful increment. Rows are never updated."""

    __tablename__ = "activity"
    __table_args__ = (Index("ix_activity_timestamp", "timestamp"),)

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    actor_identity: Mapped[str] = mapped_column(String(64), nullable=False)
    action: Mapped[str] = mapped_column(String(64), nullable=False, default=INCREMENT_ACTION)
    # Epoch milliseconds, strictly increasing across the log.
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
