import asyncio, logging
from typing import Mapping, Optional, Sequence, Set
from . import checker
from .checker import Snapshot

logger = logging.getLogger(__name__)


class Dashboard:
    """Holds the latest snapshot and the busy state shown on the page.

    Refreshes are never deduplicated: overlapping calls all run to completion
    and whichever finishes last owns the snapshot.
    """

    def __init__(self, groups: Mapping[str, Sequence[str]]):
        self.groups = groups
        self.snapshot: Optional[Snapshot] = None
        self._in_flight = 0
        self._tasks: Set[asyncio.Task] = set()

    @property
    def checking(self) -> bool:
        return self._in_flight > 0

    async def refresh(self) -> Optional[Snapshot]:
        self._in_flight += 1
        try:
            self.snapshot = await checker.check_sites(self.groups)
        except checker.CheckFailed:
            logger.exception("Failed to check status")
        finally:
            self._in_flight -= 1
        return self.snapshot

    def trigger(self) -> asyncio.Task:
        task = asyncio.create_task(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def run_periodic(self, interval_s: float) -> None:
        """Refresh now, then once per interval, without waiting on slow cycles."""
        while True:
            self.trigger()
            await asyncio.sleep(interval_s)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
