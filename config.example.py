# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit your Todoist token. Put it in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODOIST_NOTES_APP_NAME": "App display name (default: todoist-notes).",
    "TODOIST_NOTES_LOG_LEVEL": "Console logging level (default: INFO). The log file is always DEBUG.",
    # Todoist
    "TODOIST_API_TOKEN": "Todoist API token (Settings > Integrations > Developer).",
    "TODOIST_NOTES_API_TOKEN": "Same as TODOIST_API_TOKEN; takes precedence when both are set.",
    "TODOIST_NOTES_API_BASE_URL": "Sync API base URL (default: https://api.todoist.com/sync/v9).",
    "TODOIST_NOTES_HTTP_TIMEOUT_SECONDS": "HTTP timeout for the completed-tasks request (default: 30).",
    # Vault
    "TODOIST_NOTES_VAULT_DIR": "Notes vault directory (default: current directory).",
    "TODOIST_NOTES_NOTES_FOLDER": "Folder inside the vault for task notes (default: Tasks).",
    # Polling
    "TODOIST_NOTES_POLL_INTERVAL_SECONDS": "Seconds between poll cycles (default: 10).",
    # Paths (gitignored)
    "TODOIST_NOTES_DATA_DIR": "Local data directory for logs and state (default: .local/todoist_notes).",
    "TODOIST_NOTES_SETTINGS_PATH": (
        "Plugin data JSON with processed task ids (default: <data_dir>/data.json). "
        "Can point at an existing note app plugin data.json."
    ),
}
