# src/todoist_notes/notes/note_writer.py

from __future__ import annotations

"""
Task note rendering and creation.

A note looks like:

    # Buy milk

    - [Open in Todoist](https://todoist.com/showTask?id=42)

    ## Subtasks:
    - 2%
    - Oat

The subtask section is only present when the task has subtasks.
"""

import logging
import re
from typing import Sequence

from ..core.errors import NoteCreationError, NoteExistsError
from ..core.ports import Notifier, Vault
from ..tasks.task_models import Subtask

logger = logging.getLogger(__name__)

TASK_URL_TEMPLATE = "https://todoist.com/showTask?id={task_id}"
NOTE_EXTENSION = ".md"
PLACEHOLDER_CHAR = "_"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")


def task_url(task_id: str) -> str:
    return TASK_URL_TEMPLATE.format(task_id=task_id)


def sanitize_file_name(task_name: str) -> str:
    """Replace every non-alphanumeric character with "_" and add the note extension."""
    return _UNSAFE_CHARS.sub(PLACEHOLDER_CHAR, task_name) + NOTE_EXTENSION


def render_task_note(task_name: str, subtasks: Sequence[Subtask], task_id: str) -> str:
    content = f"# {task_name}\n\n"
    content += f"- [Open in Todoist]({task_url(task_id)})\n\n"

    if subtasks:
        content += "## Subtasks:\n"
        for sub in subtasks:
            content += f"- {sub.content}\n"

    return content


class NoteWriter:
    """Writes one note per task into a fixed folder of the vault."""

    def __init__(self, vault: Vault, notifier: Notifier, *, folder: str = "Tasks") -> None:
        self._vault = vault
        self._notifier = notifier
        self._folder = folder.strip("/")

    def note_path(self, task_name: str) -> str:
        file_name = sanitize_file_name(task_name)
        return f"{self._folder}/{file_name}" if self._folder else file_name

    async def create_task_page(
        self,
        task_name: str,
        subtasks: Sequence[Subtask],
        task_id: str,
    ) -> str:
        """
        Create the note for a task and return its vault-relative path.

        Raises NoteExistsError if the derived path is taken (two names that sanitize
        alike, or a task recreated under the same name), NoteCreationError on any other write failure.
        """
        path = self.note_path(task_name)
        content = render_task_note(task_name, subtasks, task_id)

        try:
            await self._vault.create(path, content)
        except FileExistsError as e:
            raise NoteExistsError(path) from e
        except (OSError, ValueError) as e:
            # ValueError covers unencodable text (lone surrogates) and paths outside the vault.
            raise NoteCreationError(path, f"Failed to create note {path}: {e}") from e

        file_name = path.rsplit("/", 1)[-1]
        logger.info("Created task note task_id=%s path=%s", task_id, path)
        self._notifier.notify(f"Created task file: {file_name}")
        return path
