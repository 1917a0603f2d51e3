# src/todoist_notes/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (a missing token only fails the API calls).
- The per-installation state (processed task ids) is NOT here, see core/plugin_settings.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TODOIST_NOTES"

DEFAULT_API_BASE_URL = "https://api.todoist.com/sync/v9"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_folder(name: str, default: str) -> str:
    """Vault-relative folder; values that would leave the vault fall back to default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    folder = raw.strip().replace("\\", "/").strip("/")
    parts = folder.split("/")
    if not folder or any(p in ("", ".", "..") for p in parts):
        return default
    return folder


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Todoist ----
    todoist_api_token: Optional[str]
    todoist_api_base_url: str
    http_timeout_seconds: float

    # ---- Vault ----
    vault_dir: Path
    notes_folder: str

    # ---- Polling ----
    poll_interval_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    settings_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todoist-notes")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        # The plain TODOIST_API_TOKEN name is what the Todoist docs (and most scripts) use.
        todoist_api_token = _first_env(_k("API_TOKEN"), "TODOIST_API_TOKEN", default=None)
        todoist_api_base_url = _env(_k("API_BASE_URL"), DEFAULT_API_BASE_URL).rstrip("/")
        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 30.0)

        vault_dir = _env_path(_k("VAULT_DIR"), Path("."))
        notes_folder = _env_folder(_k("NOTES_FOLDER"), "Tasks")

        poll_interval_seconds = _env_float(_k("POLL_INTERVAL_SECONDS"), 10.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todoist_notes"))
        settings_path = _env_path(_k("SETTINGS_PATH"), data_dir / "data.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            todoist_api_token=todoist_api_token,
            todoist_api_base_url=todoist_api_base_url,
            http_timeout_seconds=http_timeout_seconds,
            vault_dir=vault_dir,
            notes_folder=notes_folder,
            poll_interval_seconds=poll_interval_seconds,
            data_dir=data_dir,
            settings_path=settings_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
