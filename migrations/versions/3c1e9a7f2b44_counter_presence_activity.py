"""counter, presence and activity tables

Revision ID: 3c1e9a7f2b44
Revises:
Create Date: 2026-10-19 09:12:40.512331

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1e9a7f2b44"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the counter, presence and activity tables."""
    op.create_table(
        "counter",
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("daily_count", sa.BigInteger(), nullable=False),
        sa.Column("total_count", sa.BigInteger(), nullable=False),
        sa.Column("last_reset_date", sa.String(length=10), nullable=False),
        sa.CheckConstraint("daily_count >= 0", name="ck_counter_daily_non_negative"),
        sa.CheckConstraint("total_count >= daily_count", name="ck_counter_total_covers_daily"),
        sa.PrimaryKeyConstraint("type"),
    )
    op.create_table(
        "user_presence",
        sa.Column("identity", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("last_seen", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("identity"),
    )
    op.create_index("ix_user_presence_last_seen", "user_presence", ["last_seen"])
    op.create_table(
        "activity",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            autoincrement=True,
            nullable=False,
        ),
        sa.Column("actor_identity", sa.String(length=64), nullable=False),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("timestamp", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_timestamp", "activity", ["timestamp"])


def downgrade() -> None:
    """Drop the counter, presence and activity tables."""
    op.drop_index("ix_activity_timestamp", table_name="activity")
    op.drop_table("activity")
    op.drop_index("ix_user_presence_last_seen", table_name="user_presence")
    op.drop_table("user_presence")
    op.drop_table("counter")
