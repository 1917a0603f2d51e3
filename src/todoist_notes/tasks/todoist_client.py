# src/todoist_notes/tasks/todoist_client.py

from __future__ import annotations

"""
Todoist completed-tasks client.

Fail-soft by contract: a non-2xx status, a transport error or an unreadable
body is logged and turned into an empty list. The poll interval is the retry
mechanism, so nothing here retries or backs off.
"""

import logging
from datetime import datetime
from typing import Any, Callable

import httpx

from ..config import DEFAULT_API_BASE_URL
from .task_models import Task

logger = logging.getLogger(__name__)

SINCE_FORMAT = "%Y-%m-%dT%H:%M"


def start_of_today(now: datetime | None = None) -> datetime:
    """Local midnight of the current day."""
    now = now or datetime.now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def format_since(since: datetime) -> str:
    """Format a timestamp the way the completed/get_all endpoint expects (YYYY-MM-DDTHH:mm)."""
    return since.strftime(SINCE_FORMAT)


class TodoistClient:
    """
    Reads completed tasks from the Todoist Sync API.

    The token and the httpx.AsyncClient are injected. When no client is passed
    one is created here and closed by aclose(); a borrowed client is left open.
    """

    def __init__(
        self,
        api_token: str | None,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        if not api_token or not str(api_token).strip():
            logger.warning(
                "Todoist API token is not set (TODOIST_API_TOKEN); requests will be rejected."
            )
        self._api_token = (api_token or "").strip()
        self._base_url = base_url.rstrip("/")
        self._clock = clock
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def fetch_completed_tasks_today(self) -> list[Task]:
        return await self.fetch_completed_tasks_since(start_of_today(self._clock()))

    async def fetch_completed_tasks_since(self, since: datetime) -> list[Task]:
        url = f"{self._base_url}/completed/get_all"
        params = {"since": format_since(since)}
        headers = {"Authorization": f"Bearer {self._api_token}"}

        try:
            response = await self._http.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Failed to fetch completed tasks: %s", e)
            return []

        if not response.is_success:
            logger.error(
                "Failed to fetch completed tasks status=%s body=%s",
                response.status_code,
                response.text,
            )
            return []

        try:
            data: Any = response.json()
        except ValueError:
            logger.error("Completed tasks response is not JSON: %.200s", response.text)
            return []

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []

        tasks: list[Task] = []
        for item in items:
            task = Task.from_api(item)
            if task is not None:
                tasks.append(task)

        logger.debug("Fetched %d completed task(s) since %s", len(tasks), params["since"])
        return tasks
