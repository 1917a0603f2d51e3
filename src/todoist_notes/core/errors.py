# src/todoist_notes/core/errors.py

from __future__ import annotations


class TodoistNotesError(Exception):
    """Base class for errors raised by todoist_notes."""


class NoteCreationError(TodoistNotesError):
    """A task note could not be written to the vault."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Failed to create note {path}")


class NoteExistsError(NoteCreationError):
    """The derived note path is already taken (create-new semantics)."""

    def __init__(self, path: str) -> None:
        super().__init__(path, f"Note already exists: {path}")


class SettingsPersistError(TodoistNotesError):
    """Plugin settings could not be written to durable storage."""
