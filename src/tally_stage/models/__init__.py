"""SQLAlchemy models for the Tally Stage application."""

from .activity import ActivityEvent
from .counter import GLOBAL_COUNTER_TYPE, Counter
from .presence import PresenceRecord

__all__ = [
    "ActivityEvent",
    "Counter", "GLOBAL_COUNTER_TYPE",
    "PresenceRecord",
]
