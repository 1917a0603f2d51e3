# src/todoist_notes/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the plugin, starts it and keeps polling until
SIGINT/SIGTERM, then stops the plugin and closes the HTTP client.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_app
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    app = create_app(settings=settings)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on every platform (e.g. Windows event loops); Ctrl+C still raises there.
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, stop.set)

    try:
        await app.plugin.start()
        logger.info("Polling Todoist every %.0fs. Press Ctrl+C to stop.", settings.poll_interval_seconds)
        await stop.wait()
        logger.info("Stop requested, shutting down...")
    finally:
        await app.aclose()


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
