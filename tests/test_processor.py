# tests/test_processor.py

from __future__ import annotations

import pytest

from todoist_notes.core.plugin_settings import PluginSettings
from todoist_notes.notes.note_writer import NoteWriter
from todoist_notes.notes.vault import FileSystemVault
from todoist_notes.sync.processor import SyncProcessor

from .fakes import RecordingNoteWriter, make_task


def _processor(plugin_settings, store, writer, notifier) -> SyncProcessor:
    return SyncProcessor(plugin_settings, store, writer, notifier)


@pytest.mark.asyncio
async def test_already_processed_ids_are_never_written_again(store, notifier) -> None:
    settings = PluginSettings(processed_task_ids=["1"])
    writer = RecordingNoteWriter()
    proc = _processor(settings, store, writer, notifier)

    for _ in range(3):
        result = await proc.process_batch([make_task("1", "Old"), make_task("2", "New")])

    assert [c[2] for c in writer.calls] == ["2"]
    assert result.skipped == ["1", "2"]
    assert settings.processed_task_ids == ["1", "2"]


@pytest.mark.asyncio
async def test_duplicate_inside_batch_creates_one_note(plugin_settings, store, notifier) -> None:
    writer = RecordingNoteWriter()
    proc = _processor(plugin_settings, store, writer, notifier)
    a, b = make_task("A", "Task A"), make_task("B", "Task B")

    result = await proc.process_batch([a, b, a])

    assert [c[2] for c in writer.calls] == ["A", "B"]
    assert result.created == ["A", "B"]
    assert result.skipped == ["A"]


@pytest.mark.asyncio
async def test_each_new_id_is_persisted_immediately(plugin_settings, store, notifier) -> None:
    proc = _processor(plugin_settings, store, RecordingNoteWriter(), notifier)

    await proc.process_batch([make_task("1", "a"), make_task("2", "b")])

    assert store.saves == 2
    assert store.data is not None
    assert store.data["processedTaskIds"] == ["1", "2"]


@pytest.mark.asyncio
async def test_failed_note_is_not_marked_and_does_not_stop_batch(plugin_settings, store, notifier) -> None:
    writer = RecordingNoteWriter(fail_ids=["2"])
    proc = _processor(plugin_settings, store, writer, notifier)

    result = await proc.process_batch([make_task("1", "a"), make_task("2", "b"), make_task("3", "c")])

    assert result.created == ["1", "3"]
    assert result.failed == ["2"]
    assert plugin_settings.processed_task_ids == ["1", "3"]
    assert any("Could not create note" in n for n in notifier.notices)

    # Next cycle retries the failed one once the writer recovers.
    writer.fail_ids.clear()
    result2 = await proc.process_batch([make_task("2", "b")])
    assert result2.created == ["2"]


@pytest.mark.asyncio
async def test_save_failure_warns_and_keeps_id_in_memory(plugin_settings, store, notifier) -> None:
    store.fail_saves = True
    writer = RecordingNoteWriter()
    proc = _processor(plugin_settings, store, writer, notifier)

    result = await proc.process_batch([make_task("1", "a"), make_task("1", "a")])

    assert result.created == ["1"]
    assert result.skipped == ["1"]
    assert len(writer.calls) == 1
    assert plugin_settings.processed_task_ids == ["1"]
    assert any(n.startswith("Warning:") for n in notifier.notices)


@pytest.mark.asyncio
async def test_note_writer_receives_content_subtasks_and_id(plugin_settings, store, notifier) -> None:
    writer = RecordingNoteWriter()
    proc = _processor(plugin_settings, store, writer, notifier)

    await proc.process_batch([make_task("42", "Buy milk", "2%", "Oat")])

    name, subtasks, task_id = writer.calls[0]
    assert name == "Buy milk"
    assert [s.content for s in subtasks] == ["2%", "Oat"]
    assert task_id == "42"


@pytest.mark.asyncio
async def test_unwritable_task_does_not_stop_the_rest_of_the_batch(tmp_path, plugin_settings, store, notifier) -> None:
    writer = NoteWriter(FileSystemVault(tmp_path), notifier)
    proc = _processor(plugin_settings, store, writer, notifier)

    result = await proc.process_batch([make_task("1", "bad \ud800 x"), make_task("2", "good")])

    assert result.failed == ["1"]
    assert result.created == ["2"]
    assert plugin_settings.processed_task_ids == ["2"]
    assert sorted(p.name for p in (tmp_path / "Tasks").iterdir()) == ["good.md"]


@pytest.mark.asyncio
async def test_unexpected_writer_error_is_contained(plugin_settings, store, notifier) -> None:
    class FlakyWriter(RecordingNoteWriter):
        async def create_task_page(self, task_name, subtasks, task_id):
            if task_id == "1":
                raise RuntimeError("boom")
            return await super().create_task_page(task_name, subtasks, task_id)

    writer = FlakyWriter()
    proc = _processor(plugin_settings, store, writer, notifier)

    result = await proc.process_batch([make_task("1", "a"), make_task("2", "b")])

    assert result.failed == ["1"]
    assert [c[2] for c in writer.calls] == ["2"]
    assert plugin_settings.processed_task_ids == ["2"]
