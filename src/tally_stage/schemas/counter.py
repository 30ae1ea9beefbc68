# src/tally_stage/schemas/counter.py
"""Counter-related Pydantic schemas."""

from pydantic import Field

from .common import IDENTITY_MAX_LENGTH, ApiModel


class CounterSnapshot(ApiModel):
    """Logical view of the counter for the current day."""

    daily_count: int = Field(0, ge=0)
    total_count: int = Field(0, ge=0)


class IncrementRequest(ApiModel):
    """Schema for incrementing the shared counter."""

    actor_identity: str = Field(
        ...,
        min_length=1,
        max_length=IDENTITY_MAX_LENGTH,
        description="Display name credited in the activity feed",
    )


class ResetRequest(ApiModel):
    """Schema for the administrative reset."""

    requested_by: str | None = Field(
        None,
        max_length=IDENTITY_MAX_LENGTH,
        description="Identity asking for the reset; ignored when authentication is enabled",
    )
