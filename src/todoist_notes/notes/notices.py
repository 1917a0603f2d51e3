# src/todoist_notes/notes/notices.py

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """
    Notice sink for running outside a note-taking app.

    Each notice is printed with a local timestamp and mirrored into the log,
    so the log file keeps the same history the user saw.
    """

    def __init__(self, *, printer: Callable[[str], None] = print) -> None:
        self._print = printer

    def notify(self, message: str) -> None:
        logger.info("Notice: %s", message)
        try:
            self._print(f"[{_ts_local()}] {message}")
        except (OSError, ValueError):
            # stdout may be closed or unable to encode the text; the log line above is enough.
            logger.debug("Notice print failed.", exc_info=True)
