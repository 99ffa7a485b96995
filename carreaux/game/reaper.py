"""Periodic removal of idle game sessions."""

import asyncio
import logging
from typing import Optional

from .session import SessionStore

logger = logging.getLogger(__name__)


class SessionReaper:
    """Sweeps idle sessions out of a store on a fixed interval."""

    def __init__(self, store: SessionStore, interval_seconds: float = 300):
        self.store = store
        self.interval_seconds = interval_seconds
        self.sweeps = 0
        self._task: Optional[asyncio.Task] = None

    def start(self) -> None:
        """Start sweeping. Calling start on a running reaper does nothing."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._sweep_loop())

    async def stop(self) -> None:
        """Stop sweeping and wait for the loop to exit."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def sweep(self) -> int:
        """Run one sweep now."""
        removed = await self.store.sweep_idle()
        self.sweeps += 1
        if removed > 0:
            logger.info("Carreaux cleanup: removed %d idle game(s)", removed)
        return removed

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.sweep()
            except Exception:
                logger.exception("Idle session sweep failed")

    @property
    def is_running(self) -> bool:
        """Check if the sweep loop is active."""
        return self._task is not None and not self._task.done()
