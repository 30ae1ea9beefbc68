# src/tally_stage/models/presence.py
"""Liveness records for connected identities."""

from sqlalchemy import BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from tally_stage.db.session import Base


class PresenceRecord(Base):
    """Most recent heartbeat per identity.

    ``identity`` is the key: the display name itself, or the token subject
    when authentication is enabled. ``name`` is what other users see.
    """

    __tablename__ = "user_presence"
    __table_args__ = (Index("ix_user_presence_last_seen", "last_seen"),)

    identity: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    # Epoch milliseconds.
    last_seen: Mapped[int] = mapped_column(BigInteger, nullable=False)
