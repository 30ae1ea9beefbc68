# src/tally_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    activity_router,
    board_router,
    counters_router,
    presence_router,
    system_router,
)

__all__ = [
    "activity_router",
    "board_router",
    "counters_router",
    "presence_router",
    "system_router",
]
