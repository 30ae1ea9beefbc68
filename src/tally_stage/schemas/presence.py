# src/tally_stage/schemas/presence.py
"""Presence-related Pydantic schemas."""

from pydantic import Field

from .common import IDENTITY_MAX_LENGTH, ApiModel


class HeartbeatRequest(ApiModel):
    """Schema for a presence heartbeat."""

    identity: str = Field(..., min_length=1, max_length=IDENTITY_MAX_LENGTH)
    previous_identity: str | None = Field(
        None,
        max_length=IDENTITY_MAX_LENGTH,
        description="Name used before a rename; its record is removed",
    )


class PresenceOut(ApiModel):
    """An identity seen within the online window."""

    identity: str
    name: str
    last_seen: int = Field(..., description="Epoch milliseconds of the latest heartbeat")
