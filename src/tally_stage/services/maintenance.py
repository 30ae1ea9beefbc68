"""Background housekeeping for presence and activity tables.

Neither task is needed for correctness: the online view already filters by
``last_seen`` and the feed by timestamp. The worker only keeps the tables
from growing without bound.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tally_stage.core.settings import settings
from tally_stage.db.session import SessionLocal
from tally_stage.services.activity_log import prune_events
from tally_stage.services.presence_service import sweep_presence

logger = logging.getLogger(__name__)


@dataclass
class MaintenanceReport:
    """Rows removed by one maintenance pass."""

    presence_removed: int = 0
    events_removed: int = 0


class MaintenanceWorker:
    """Periodically sweeps stale presence rows and prunes old activity."""

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        """Initialize the worker.

        Args:
            session_factory: Callable returning a new session. Defaults to the
                application's ``SessionLocal``.
        """
        self._session_factory = session_factory or SessionLocal
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()
        self.passes = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background loop."""
        if not self.running:
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background loop and wait for the current pass to finish."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    def run_once(self) -> MaintenanceReport:
        """Run a single sweep synchronously."""
        report = MaintenanceReport()
        with self._session_factory() as db:
            report.presence_removed = sweep_presence(db)
            if settings.activity_retention_seconds:
                report.events_removed = prune_events(db, settings.activity_retention_seconds)
        self.passes += 1
        logger.debug(
            "Maintenance pass %d removed %d presence rows and %d events",
            self.passes,
            report.presence_removed,
            report.events_removed,
        )
        return report

    async def _run(self) -> None:
        interval = max(0.1, float(settings.maintenance_interval_seconds))

        while not self._stopping.is_set():
            try:
                await asyncio.to_thread(self.run_once)
            except SQLAlchemyError as e:
                logger.warning("MaintenanceWorker encountered database error: %s", e)
            except (OSError, ValueError) as e:
                logger.error("MaintenanceWorker failed: %s", e, exc_info=True)

            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=interval)
            except TimeoutError:
                continue
