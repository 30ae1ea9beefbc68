# src/tally_stage/schemas/board.py
"""Combined read model returned to polling clients."""

from pydantic import Field

from .activity import ActivityEventOut
from .common import ApiModel
from .counter import CounterSnapshot
from .presence import PresenceOut


class BoardSnapshot(ApiModel):
    """Counter, online set and recent activity captured at one moment."""

    counter: CounterSnapshot
    online: list[PresenceOut] = Field(default_factory=list)
    recent_events: list[ActivityEventOut] = Field(default_factory=list)
    generated_at: int = Field(..., description="Epoch milliseconds the snapshot was taken")
