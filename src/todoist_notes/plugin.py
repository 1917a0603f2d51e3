# src/todoist_notes/plugin.py

from __future__ import annotations

"""
The plugin component: lifecycle + owned state.

start() is the activation hook (load settings, first poll, start the timer),
stop() the deactivation hook. Everything the sync loop touches is passed in,
so the component runs the same against the real vault and against test fakes.
"""

import logging

from .core.plugin_settings import PluginSettings
from .core.ports import Notifier, SettingsStore, TaskSource, Vault
from .notes.note_writer import NoteWriter
from .sync.poller import Poller
from .sync.processor import SyncProcessor

logger = logging.getLogger(__name__)


class TodoistNotesPlugin:
    def __init__(
        self,
        *,
        source: TaskSource,
        vault: Vault,
        notifier: Notifier,
        store: SettingsStore,
        notes_folder: str = "Tasks",
        poll_interval_seconds: float = 10.0,
    ) -> None:
        self._source = source
        self._vault = vault
        self._notifier = notifier
        self._store = store
        self._notes_folder = notes_folder
        self._poll_interval_seconds = poll_interval_seconds

        self.settings: PluginSettings | None = None
        self.poller: Poller | None = None

    async def load_settings(self) -> PluginSettings:
        self.settings = PluginSettings.from_data(await self._store.load())
        logger.info("Settings loaded processed_task_ids=%d", len(self.settings.processed_task_ids))
        return self.settings

    async def save_settings(self) -> None:
        if self.settings is None:
            return
        await self._store.save(self.settings.to_data())

    async def start(self) -> None:
        if self.poller is not None:
            return

        settings = await self.load_settings()
        writer = NoteWriter(self._vault, self._notifier, folder=self._notes_folder)
        processor = SyncProcessor(settings, self._store, writer, self._notifier)
        self.poller = Poller(
            self._source,
            processor,
            self._notifier,
            interval_seconds=self._poll_interval_seconds,
        )
        await self.poller.start()

    async def stop(self) -> None:
        poller, self.poller = self.poller, None
        if poller is not None:
            await poller.stop()
