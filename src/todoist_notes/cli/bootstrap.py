# src/todoist_notes/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations (Todoist client, vault, notices, JSON store) into the plugin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import get_settings
from ..core.plugin_settings import JsonSettingsStore
from ..notes.notices import ConsoleNotifier
from ..notes.vault import FileSystemVault
from ..plugin import TodoistNotesPlugin
from ..tasks.todoist_client import TodoistClient

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class App:
    plugin: TodoistNotesPlugin
    client: TodoistClient

    async def aclose(self) -> None:
        await self.plugin.stop()
        await self.client.aclose()


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings.vault_dir.mkdir(parents=True, exist_ok=True)


def create_app(*, settings=None) -> App:
    """
    Build the plugin from the provided settings.

    If settings is None, falls back to get_settings(). Must be called with a running
    event loop available later (the HTTP client is used from async code only).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    client = TodoistClient(
        settings.todoist_api_token,
        base_url=settings.todoist_api_base_url,
        timeout_seconds=settings.http_timeout_seconds,
    )
    plugin = TodoistNotesPlugin(
        source=client,
        vault=FileSystemVault(settings.vault_dir),
        notifier=ConsoleNotifier(),
        store=JsonSettingsStore(settings.settings_path),
        notes_folder=settings.notes_folder,
        poll_interval_seconds=settings.poll_interval_seconds,
    )
    logger.info(
        "App wired vault=%s folder=%s settings=%s",
        settings.vault_dir,
        settings.notes_folder,
        settings.settings_path,
    )
    return App(plugin=plugin, client=client)
