# src/todoist_notes/sync/poller.py

from __future__ import annotations

"""
Poller.

Owns the startup cycle and the periodic timer:
- start(): run one cycle right away (awaited), then tick every interval_seconds
- every tick launches a poll cycle (fetch today's completed tasks -> process batch)
- cycles are single-flight: a tick that finds a cycle in flight is skipped
- stop(): cancel the timer; in-flight cycles are allowed to finish

A cycle never raises: fetch failures come back as an empty list and anything
unexpected is logged, so polling keeps going.
"""

import asyncio
import contextlib
import json
import logging
from enum import StrEnum

from ..core.ports import Notifier, TaskSource
from .processor import BatchResult, SyncProcessor

logger = logging.getLogger(__name__)

STARTUP_NOTICE = "Fetched today's completed tasks"
TICK_NOTICE = "Completed tasks for today updated."


class PollerState(StrEnum):
    IDLE = "idle"
    POLLING = "polling"


class Poller:
    def __init__(
        self,
        source: TaskSource,
        processor: SyncProcessor,
        notifier: Notifier,
        *,
        interval_seconds: float = 10.0,
    ) -> None:
        self._source = source
        self._processor = processor
        self._notifier = notifier
        self._interval = max(0.01, float(interval_seconds))

        self._state = PollerState.IDLE
        self._timer: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[BatchResult | None]] = set()

    @property
    def state(self) -> PollerState:
        return self._state

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def run_cycle(self) -> BatchResult | None:
        """
        One fetch-and-process cycle.

        Returns the batch result, or None if the cycle was skipped (another one in flight)
        or failed unexpectedly.
        """
        if self._state is PollerState.POLLING:
            logger.debug("Poll cycle already in flight; skipping this one")
            return None

        self._state = PollerState.POLLING
        try:
            tasks = await self._source.fetch_completed_tasks_today()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Completed tasks today: %s",
                    json.dumps([{"id": t.id, "content": t.content} for t in tasks], ensure_ascii=False),
                )
            return await self._processor.process_batch(tasks)
        except Exception:
            logger.exception("Poll cycle failed")
            return None
        finally:
            self._state = PollerState.IDLE

    async def start(self) -> None:
        if self.running:
            return

        await self.run_cycle()
        self._notifier.notify(STARTUP_NOTICE)

        self._timer = asyncio.create_task(self._run_timer(), name="todoist-notes-poller")
        logger.info("Poller started interval=%.1fs", self._interval)

    async def stop(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await timer

        if self._inflight:
            logger.debug("Waiting for %d in-flight poll cycle(s)", len(self._inflight))
            await asyncio.gather(*self._inflight, return_exceptions=True)
        logger.info("Poller stopped")

    async def _run_timer(self) -> None:
        # Fixed cadence, independent of how long each cycle takes.
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self._interval
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            next_at += self._interval
            if next_at <= loop.time():
                # Fell behind (suspended laptop, blocked loop): resume the cadence from now.
                next_at = loop.time() + self._interval
            if self._state is PollerState.POLLING:
                logger.debug("Tick skipped: previous poll cycle still running")
                continue
            cycle = asyncio.create_task(self._tick())
            self._inflight.add(cycle)
            cycle.add_done_callback(self._inflight.discard)

    async def _tick(self) -> BatchResult | None:
        result = await self.run_cycle()
        if result is not None:
            self._notifier.notify(TICK_NOTICE)
        return result
