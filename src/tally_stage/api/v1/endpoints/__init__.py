# src/tally_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .activity import router as activity_router
from .board import router as board_router
from .counters import router as counters_router
from .presence import router as presence_router
from .system import router as system_router

__all__ = [
    "activity_router",
    "board_router",
    "counters_router",
    "presence_router",
    "system_router",
]
