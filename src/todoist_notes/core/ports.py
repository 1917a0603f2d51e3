# src/todoist_notes/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The sync loop depends on Protocols instead of concrete implementations.
These stand in for the host application's facilities (vault, notices, plugin
data storage) and for the remote task API, so each can be swapped for a fake.
"""

from typing import Any, Awaitable, Protocol, Sequence

from ..tasks.task_models import Subtask, Task

# Whole-object plugin data as stored on disk: {"mySetting": ..., "processedTaskIds": [...]}.
SettingsData = dict[str, Any]


class TaskSource(Protocol):
    """Remote source of completed tasks (Todoist)."""

    def fetch_completed_tasks_today(self) -> Awaitable[list[Task]]: ...


class Vault(Protocol):
    """
    Host file system, addressed by vault-relative paths ("Tasks/Buy_milk.md").

    create() must fail with FileExistsError if the path is already taken
    and must not leave a file behind when it fails.
    """

    def create(self, path: str, content: str) -> Awaitable[None]: ...


class Notifier(Protocol):
    """Transient user-visible status messages (the host's toast/notice)."""

    def notify(self, message: str) -> None: ...


class SettingsStore(Protocol):
    """
    Key-value plugin data storage. Whole-object read/write.

    load() returns None when nothing has been saved yet.
    """

    def load(self) -> Awaitable[SettingsData | None]: ...

    def save(self, data: SettingsData) -> Awaitable[None]: ...


class TaskNoteWriter(Protocol):
    def create_task_page(
            self,
            task_name: str,
            subtasks: Sequence[Subtask],
            task_id: str,
    ) -> Awaitable[str]: ...
