"""Session sweeper — deletes expired sessions in the background.

Runs as a long-lived task in the FastAPI lifespan, one DELETE per pass
with its own DB session. Lookups check expiry themselves, so a slow or
failing sweep only leaves dead rows around; it never lets an expired
session authenticate.

Usage:
    sweeper = SessionSweeper()
    asyncio.create_task(sweeper.run_loop())
"""

import asyncio
from typing import Optional

import structlog

from taskledger.auth.sessions import SessionStore
from taskledger.config import settings
from taskledger.db.engine import async_session_factory

logger = structlog.get_logger()


class SessionSweeper:
    """Background worker that periodically purges expired sessions."""

    def __init__(self, interval: Optional[float] = None, session_factory=None):
        self.interval = interval or settings.session_sweep_interval_seconds
        self.session_factory = session_factory or async_session_factory
        self._running = False

    async def run_loop(self) -> None:
        """Main worker loop — sweep, then sleep for the interval."""
        self._running = True
        logger.info("session_sweeper.started", interval=self.interval)

        while self._running:
            try:
                await self.sweep_once()
            except Exception:
                logger.exception("session_sweeper.error")
            await asyncio.sleep(self.interval)

    async def sweep_once(self) -> int:
        async with self.session_factory() as db:
            removed = await SessionStore(db).sweep()
        if removed:
            logger.info("session.sweep", removed=removed)
        return removed

    def stop(self) -> None:
        """Signal the worker to stop."""
        self._running = False
        logger.info("session_sweeper.stopping")
