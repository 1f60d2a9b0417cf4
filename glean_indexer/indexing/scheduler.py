"""Recurring indexing runs on the application's event loop."""

import asyncio
import logging
from typing import Callable, Optional

from glean_indexer.core.config import settings

logger = logging.getLogger(__name__)


class IndexingScheduler:
    """Runs a blocking job on a fixed schedule.

    Runs never overlap: the next one is scheduled ``frequency`` seconds after
    the previous one finished or timed out.
    """

    def __init__(
        self,
        job: Callable[[], None],
        frequency: float,
        timeout: float,
        initial_delay: float = 0.0,
    ):
        self.job = job
        self.frequency = frequency
        self.timeout = timeout
        self.initial_delay = initial_delay
        self.runs = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.info(
            f"Scheduling indexing every {self.frequency}s "
            f"(timeout={self.timeout}s, initial_delay={self.initial_delay}s)"
        )
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Indexing scheduler stopped")

    async def run_once(self) -> None:
        """Run the job once, logging failures instead of raising them.

        A worker thread cannot be interrupted, so a run that times out is
        still awaited before this returns.
        """
        self.runs += 1
        run = asyncio.ensure_future(asyncio.to_thread(self.job))
        try:
            await asyncio.wait_for(asyncio.shield(run), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(
                f"Scheduled indexing run {self.runs} timed out after {self.timeout}s; "
                "waiting for it to finish before scheduling the next run"
            )
            await self._finish(run)
        except Exception:
            logger.exception(f"Scheduled indexing run {self.runs} failed")

    async def _finish(self, run: asyncio.Future) -> None:
        try:
            await run
        except Exception:
            logger.exception(f"Scheduled indexing run {self.runs} failed after timing out")

    async def _loop(self) -> None:
        await asyncio.sleep(self.initial_delay)
        while True:
            await self.run_once()
            await asyncio.sleep(self.frequency)


def create_scheduler(job: Callable[[], None]) -> IndexingScheduler:
    """Create a scheduler using the configured schedule."""
    return IndexingScheduler(
        job,
        frequency=settings.schedule_frequency_minutes * 60,
        timeout=settings.schedule_timeout_minutes * 60,
        initial_delay=settings.schedule_initial_delay_seconds,
    )
