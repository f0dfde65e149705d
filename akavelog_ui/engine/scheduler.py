"""Single timer driving every periodic poll."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence, Set

from akavelog_ui.engine.poller import Poller
from akavelog_ui.logging_config import get_logger

logger = get_logger(name=__name__)


class PollScheduler:
    """Fires every registered poller once per tick from one asyncio task.

    Each tick starts the polls as independent tasks, so a slow request never
    holds back the other poll kind or the next tick. ``stop()`` returns
    immediately; polls still in flight finish on their own and their
    results are discarded by the (now closed) pollers.
    """

    def __init__(self, pollers: Sequence[Poller], interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.interval_seconds = interval_seconds
        self._pollers = list(pollers)
        self._task: Optional[asyncio.Task] = None
        self._inflight: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def start(self) -> None:
        """Open every poller and start ticking. Must be called from a running loop."""
        if self.running:
            return
        for poller in self._pollers:
            poller.open()
        self._task = asyncio.get_running_loop().create_task(self._run(), name="poll-scheduler")
        logger.info(
            "Polling {} every {:.0f} ms",
            ", ".join(p.name for p in self._pollers),
            self.interval_seconds * 1000,
        )

    def stop(self) -> None:
        for poller in self._pollers:
            poller.close()
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.info("Polling stopped ({} polls still in flight)", len(self._inflight))

    def tick(self) -> List[asyncio.Task]:
        """Start one poll per poller without waiting for any of them."""
        tasks = []
        for poller in self._pollers:
            task = asyncio.create_task(poller.poll(), name=f"poll-{poller.name}")
            self._inflight.add(task)
            task.add_done_callback(self._on_poll_done)
            tasks.append(task)
        return tasks

    def _on_poll_done(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error("Unexpected error in {}", task.get_name())

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.interval_seconds
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            self.tick()
            next_tick += self.interval_seconds
            now = loop.time()
            if next_tick < now:
                # fell behind (suspended loop); skip missed ticks
                next_tick = now + self.interval_seconds
