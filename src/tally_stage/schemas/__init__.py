"""Pydantic schemas for the Tally Stage API."""

from .activity import ActivityEventOut
from .board import BoardSnapshot
from .common import ApiModel
from .counter import CounterSnapshot, IncrementRequest, ResetRequest
from .presence import HeartbeatRequest, PresenceOut

__all__ = [
    "ActivityEventOut",
    "ApiModel",
    "BoardSnapshot",
    "CounterSnapshot",
    "HeartbeatRequest",
    "IncrementRequest",
    "PresenceOut",
    "ResetRequest",
]
