# src/todoist_notes/sync/processor.py

from __future__ import annotations

"""
Sync processor: completed tasks -> notes, exactly once per task id.

For each task, in order:
- id already processed -> skip
- otherwise create the note, then record the id and persist settings immediately

Tasks are handled one at a time and whole batches run under a lock, so the
processed-id set has a single writer even if two poll cycles overlap.
A failed note does not stop the batch and its id is NOT recorded.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..core.errors import NoteCreationError, SettingsPersistError
from ..core.plugin_settings import PluginSettings
from ..core.ports import Notifier, SettingsStore, TaskNoteWriter
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BatchResult:
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class SyncProcessor:
    def __init__(
        self,
        settings: PluginSettings,
        store: SettingsStore,
        writer: TaskNoteWriter,
        notifier: Notifier,
    ) -> None:
        self._settings = settings
        self._store = store
        self._writer = writer
        self._notifier = notifier
        self._lock = asyncio.Lock()

    @property
    def settings(self) -> PluginSettings:
        return self._settings

    async def process_batch(self, tasks: Iterable[Task]) -> BatchResult:
        result = BatchResult()
        async with self._lock:
            for task in tasks:
                await self._process_one(task, result)

        if result.created or result.failed:
            logger.info(
                "Batch done created=%d skipped=%d failed=%d",
                len(result.created),
                len(result.skipped),
                len(result.failed),
            )
        return result

    async def _process_one(self, task: Task, result: BatchResult) -> None:
        task_id = str(task.id)

        if self._settings.is_processed(task_id):
            result.skipped.append(task_id)
            return

        try:
            await self._writer.create_task_page(task.content, task.subtasks, task_id)
        except NoteCreationError as e:
            logger.warning("Note for task_id=%s not created: %s", task_id, e)
            self._notifier.notify(f"Could not create note for task: {task.content} ({e})")
            result.failed.append(task_id)
            return
        except Exception:
            logger.exception("Unexpected error creating note for task_id=%s", task_id)
            self._notifier.notify(f"Could not create note for task: {task.content}")
            result.failed.append(task_id)
            return

        self._settings.mark_processed(task_id)
        result.created.append(task_id)

        try:
            await self._store.save(self._settings.to_data())
        except SettingsPersistError:
            # The id stays recorded in memory; the next successful save writes it out.
            logger.exception("Failed to persist processed task_id=%s", task_id)
            self._notifier.notify("Warning: could not save processed tasks; will retry on next save.")
