# src/tally_stage/schemas/activity.py
"""Activity feed schemas."""

from .common import ApiModel


class ActivityEventOut(ApiModel):
    """Single entry of the recent activity feed."""

    actor_identity: str
    action: str
    timestamp: int
