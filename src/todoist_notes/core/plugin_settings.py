# src/todoist_notes/core/plugin_settings.py

from __future__ import annotations

"""
Persisted plugin data: the processed-id set plus user preferences.

Stored as one JSON object using the note app plugin's key names, so an existing
plugin data.json can be pointed at directly:

    {"mySetting": "default", "processedTaskIds": ["42", "43"]}

Loading merges stored values over DEFAULT_SETTINGS field by field (shallow).
Unknown keys are carried in `extra` and written back unchanged.
"""

import asyncio
import contextlib
import json
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import SettingsPersistError
from .ports import SettingsData

logger = logging.getLogger(__name__)

_KEY_MY_SETTING = "mySetting"
_KEY_PROCESSED = "processedTaskIds"


@dataclass(slots=True)
class PluginSettings:
    my_setting: str = "default"
    # Monotonic: ids are only ever appended.
    processed_task_ids: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def is_processed(self, task_id: str) -> bool:
        return str(task_id) in self.processed_task_ids

    def mark_processed(self, task_id: str) -> bool:
        """Record a task id. Returns False if it was already recorded."""
        task_id = str(task_id)
        if task_id in self.processed_task_ids:
            return False
        self.processed_task_ids.append(task_id)
        return True

    def to_data(self) -> SettingsData:
        data: SettingsData = dict(self.extra)
        data[_KEY_MY_SETTING] = self.my_setting
        data[_KEY_PROCESSED] = list(self.processed_task_ids)
        return data

    @classmethod
    def from_data(cls, stored: SettingsData | None) -> PluginSettings:
        """Shallow merge: DEFAULT_SETTINGS first, then every stored key overrides."""
        merged: dict[str, Any] = DEFAULT_SETTINGS.to_data()
        if isinstance(stored, dict):
            merged.update(stored)

        extra = {k: v for k, v in merged.items() if k not in (_KEY_MY_SETTING, _KEY_PROCESSED)}

        raw_ids = merged.get(_KEY_PROCESSED)
        if not isinstance(raw_ids, list):
            logger.warning("Stored %s is not a list; starting with an empty set", _KEY_PROCESSED)
            raw_ids = []

        ids: list[str] = []
        for raw in raw_ids:
            # Older data may hold numeric ids; keep one string entry per id.
            s = str(raw)
            if s not in ids:
                ids.append(s)

        return cls(
            my_setting=str(merged.get(_KEY_MY_SETTING, DEFAULT_SETTINGS.my_setting)),
            processed_task_ids=ids,
            extra=extra,
        )


DEFAULT_SETTINGS = PluginSettings()


class JsonSettingsStore:
    """
    SettingsStore backed by a single JSON file.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> SettingsData | None:
        return await asyncio.to_thread(self._load_sync)

    async def save(self, data: SettingsData) -> None:
        # Serialize on the loop thread so later in-memory mutations cannot leak into this write.
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        try:
            await asyncio.to_thread(self._write_sync, payload)
        except OSError as e:
            raise SettingsPersistError(f"Failed to save settings to {self._path}: {e}") from e

    def _load_sync(self) -> SettingsData | None:
        if not self._path.exists():
            return None
        try:
            raw = self._path.read_bytes()
        except OSError:
            logger.exception("Failed to read settings from %s; using defaults", self._path)
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            # Covers both bad UTF-8 and bad JSON.
            logger.exception("Settings file %s is not valid JSON", self._path)
            data = None
        if not isinstance(data, dict):
            self._move_aside()
            return None
        return data

    def _move_aside(self) -> None:
        # The next save would replace the file and drop the ids it still holds; keep it for recovery.
        backup = self._path.with_name(f"{self._path.name}.corrupt-{time.strftime('%Y%m%d-%H%M%S')}")
        os.replace(self._path, backup)
        logger.warning("Unreadable settings moved to %s; starting from defaults", backup)

    def _write_sync(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(payload, "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("Saved settings to %s", self._path)
