# src/tally_stage/models/counter.py
"""The singleton counter row."""

from sqlalchemy import BigInteger, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from tally_stage.db.session import Base

GLOBAL_COUNTER_TYPE = "global"


class Counter(Base):
    """Global daily and all-time tallies.

    Exactly one row exists once the first increment lands; until then the
    counter is absent and reads report zeros.
    """

    __tablename__ = "counter"
    __table_args__ = (
        CheckConstraint("daily_count >= 0", name="ck_counter_daily_non_negative"),
        CheckConstraint("total_count >= daily_count", name="ck_counter_total_covers_daily"),
    )

    type: Mapped[str] = mapped_column(String(16), primary_key=True, default=GLOBAL_COUNTER_TYPE)
    daily_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    total_count: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    # YYYY-MM-DD in the configured reference timezone.
    last_reset_date: Mapped[str] = mapped_column(String(10), nullable=False)
