# src/todoist_notes/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Subtask:
    content: str


@dataclass(slots=True, frozen=True)
class Task:
    """
    A completed item as returned by Todoist's completed/get_all.

    Notes:
    - id is normalized to str (the API returns strings in v9, numbers in older payloads);
      it is the dedup key for the processed-id set.
    - subtasks is empty when the payload has no "subtasks" field.
    """

    id: str
    content: str
    subtasks: tuple[Subtask, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, item: Any) -> Task | None:
        """Build a Task from one raw JSON item. Returns None for items without an id."""
        if not isinstance(item, dict):
            logger.warning("Skipping non-object completed item: %r", item)
            return None

        raw_id = item.get("id")
        if raw_id is None or str(raw_id).strip() == "":
            logger.warning("Skipping completed item without id: %r", item)
            return None

        subtasks: list[Subtask] = []
        for sub in item.get("subtasks") or []:
            if isinstance(sub, dict):
                subtasks.append(Subtask(content=str(sub.get("content") or "")))
            else:
                subtasks.append(Subtask(content=str(sub)))

        return cls(
            id=str(raw_id),
            content=str(item.get("content") or ""),
            subtasks=tuple(subtasks),
        )
