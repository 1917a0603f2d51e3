# tests/test_poller.py

from __future__ import annotations

import asyncio

import pytest

from todoist_notes.core.plugin_settings import PluginSettings
from todoist_notes.sync.poller import STARTUP_NOTICE, TICK_NOTICE, Poller, PollerState
from todoist_notes.sync.processor import SyncProcessor

from .fakes import FakeTaskSource, InMemorySettingsStore, RecordingNoteWriter, RecordingNotifier, make_task


class GatedTaskSource(FakeTaskSource):
    """Blocks every fetch after the first one until the gate is opened."""

    def __init__(self, tasks=None) -> None:
        super().__init__(tasks)
        self.gate = asyncio.Event()

    async def fetch_completed_tasks_today(self):
        self.calls += 1
        if self.calls > 1:
            await self.gate.wait()
        return list(self.tasks)


class ExplodingTaskSource:
    async def fetch_completed_tasks_today(self):
        raise RuntimeError("boom")


def _poller(source, *, interval: float = 0.01) -> tuple[Poller, RecordingNoteWriter, RecordingNotifier]:
    notifier = RecordingNotifier()
    writer = RecordingNoteWriter()
    proc = SyncProcessor(PluginSettings(), InMemorySettingsStore(), writer, notifier)
    return Poller(source, proc, notifier, interval_seconds=interval), writer, notifier


async def _wait_for(predicate, timeout: float = 1.0) -> None:
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)


@pytest.mark.asyncio
async def test_run_cycle_processes_fetched_tasks() -> None:
    source = FakeTaskSource([make_task("1", "a"), make_task("2", "b")])
    poller, writer, _ = _poller(source)

    result = await poller.run_cycle()

    assert result is not None
    assert result.created == ["1", "2"]
    assert len(writer.calls) == 2
    assert poller.state is PollerState.IDLE
    assert f"state={poller.state}" == "state=idle"


@pytest.mark.asyncio
async def test_run_cycle_never_raises() -> None:
    poller, writer, _ = _poller(ExplodingTaskSource())

    assert await poller.run_cycle() is None
    assert writer.calls == []
    assert poller.state is PollerState.IDLE


@pytest.mark.asyncio
async def test_overlapping_cycle_is_skipped() -> None:
    source = GatedTaskSource([make_task("1", "a")])
    poller, writer, _ = _poller(source)
    await poller.run_cycle()  # first fetch is not gated

    slow = asyncio.create_task(poller.run_cycle())
    await _wait_for(lambda: poller.state is PollerState.POLLING)

    assert await poller.run_cycle() is None
    assert source.calls == 2

    source.gate.set()
    await slow
    assert len(writer.calls) == 1


@pytest.mark.asyncio
async def test_start_runs_immediately_then_on_timer() -> None:
    source = FakeTaskSource([make_task("1", "a")])
    poller, writer, notifier = _poller(source)

    await poller.start()
    assert source.calls == 1
    assert notifier.notices[-1] == STARTUP_NOTICE
    assert poller.running

    await _wait_for(lambda: source.calls >= 3)
    await poller.stop()

    assert not poller.running
    assert len(writer.calls) == 1
    assert TICK_NOTICE in notifier.notices


@pytest.mark.asyncio
async def test_stop_waits_for_in_flight_cycle() -> None:
    source = GatedTaskSource([make_task("1", "a")])
    poller, _, _ = _poller(source)

    await poller.start()
    await _wait_for(lambda: source.calls >= 2)

    stopper = asyncio.create_task(poller.stop())
    await asyncio.sleep(0.03)
    assert not stopper.done()
    # Only the blocked cycle was running: no further ticks fired while it was in flight.
    assert source.calls == 2

    source.gate.set()
    await asyncio.wait_for(stopper, timeout=1.0)
    assert poller.state is PollerState.IDLE
