# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todoist_notes.core.plugin_settings import PluginSettings

from .fakes import InMemorySettingsStore, InMemoryVault, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal app settings compatible with cli/bootstrap.py.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment (.env, TODOIST_API_TOKEN).
    """
    return SimpleNamespace(
        app_name="todoist-notes-test",
        log_level="DEBUG",
        todoist_api_token="test-token",
        todoist_api_base_url="https://api.todoist.test/sync/v9",
        http_timeout_seconds=5.0,
        vault_dir=tmp_path / "vault",
        notes_folder="Tasks",
        poll_interval_seconds=0.01,
        data_dir=tmp_path / "data",
        settings_path=tmp_path / "data" / "data.json",
    )


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def vault() -> InMemoryVault:
    return InMemoryVault()


@pytest.fixture()
def store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture()
def plugin_settings() -> PluginSettings:
    return PluginSettings()
