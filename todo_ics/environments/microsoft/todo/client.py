"""
Microsoft To Do API Client - read task lists and due tasks from Graph.

API Reference:
==============
- Lists: https://learn.microsoft.com/graph/api/todo-list-lists
- Tasks: https://learn.microsoft.com/graph/api/todotasklist-list-tasks

Usage Example:
==============
    from todo_ics.environments.microsoft import TodoClient, TokenProvider

    client = TodoClient(token_provider=TokenProvider(access_token="EwB..."))
    for task in await client.fetch_due_tasks():
        print(task.due, task.title)
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from todo_ics.core.config import settings
from todo_ics.environments.base import UpstreamError
from todo_ics.environments.microsoft.auth.token_provider import TokenProvider
from todo_ics.environments.microsoft.todo.schemas import (
    TodoTask,
    TodoTaskList,
    TodoTaskListsResponse,
    TodoTasksResponse,
)
from todo_ics.services.throttle import Sleep, throttled


logger = logging.getLogger("todo_ics.environments.microsoft.todo")


class TodoClient:
    """
    Microsoft Graph To Do client.

    All requests of one fetch run sequentially with the same bearer token.
    Per-list requests are spaced by list_delay seconds.

    Attributes:
        token_provider: Source of the bearer token
        outlook_timezone: Windows timezone name for the Prefer header
        page_size: $top for task requests
        list_delay: Seconds between consecutive per-list requests
    """

    BASE_URL = "https://graph.microsoft.com/v1.0"

    LIST_FIELDS = "id,displayName"
    TASK_FIELDS = "id,title,status,dueDateTime,lastModifiedDateTime,categories"

    def __init__(
        self,
        token_provider: TokenProvider,
        outlook_timezone: Optional[str] = None,
        page_size: Optional[int] = None,
        list_delay: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.token_provider = token_provider
        self.outlook_timezone = outlook_timezone or settings.OUTLOOK_TZ
        self.page_size = page_size or settings.TASKS_PAGE_SIZE
        self.list_delay = list_delay if list_delay is not None else settings.LIST_REQUEST_DELAY
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self._transport = transport
        self._sleep = sleep

    # -------------------------------------------------------------------------
    # HTTP CLIENT MANAGEMENT
    # -------------------------------------------------------------------------

    def _get_headers(self, access_token: str) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {access_token}",
            "Prefer": f'outlook.timezone="{self.outlook_timezone}"',
            "Accept": "application/json",
        }

    async def _make_request(
        self,
        client: httpx.AsyncClient,
        url: str,
        access_token: str,
        params: Optional[dict] = None,
    ) -> Dict[str, Any]:
        """
        GET a Graph URL and return the parsed JSON body.

        Raises:
            UpstreamError: On a non-success status or a transport failure
        """
        try:
            response = await client.get(
                url,
                headers=self._get_headers(access_token),
                params=params,
            )
        except httpx.RequestError as e:
            logger.error(f"Network error in To Do API: {e}")
            raise UpstreamError(f"Network error: {e}")

        if not response.is_success:
            logger.error(f"To Do API error: {response.status_code} - {response.text}")
            raise UpstreamError(
                f"To Do API request failed: {response.status_code}",
                status_code=response.status_code,
                response=response.text,
            )

        return response.json()

    def _new_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    # -------------------------------------------------------------------------
    # LISTS AND TASKS
    # -------------------------------------------------------------------------

    async def list_task_lists(
        self,
        client: httpx.AsyncClient,
        access_token: str,
    ) -> List[TodoTaskList]:
        """Return every task list of the signed-in user, in Graph order."""
        lists: List[TodoTaskList] = []
        url: Optional[str] = f"{self.BASE_URL}/me/todo/lists"
        params: Optional[dict] = {"$select": self.LIST_FIELDS}

        while url:
            data = await self._make_request(client, url, access_token, params=params)
            page = TodoTaskListsResponse(**data)
            lists.extend(page.value)
            # nextLink already carries the query string
            url, params = page.next_link, None

        logger.info(f"Fetched {len(lists)} task lists")
        return lists

    async def list_tasks(
        self,
        client: httpx.AsyncClient,
        access_token: str,
        list_id: str,
    ) -> List[TodoTask]:
        """Return every task of one list, following @odata.nextLink pages."""
        tasks: List[TodoTask] = []
        url: Optional[str] = f"{self.BASE_URL}/me/todo/lists/{quote(list_id, safe='')}/tasks"
        params: Optional[dict] = {
            "$select": self.TASK_FIELDS,
            "$top": self.page_size,
        }

        while url:
            data = await self._make_request(client, url, access_token, params=params)
            page = TodoTasksResponse(**data)
            tasks.extend(page.value)
            url, params = page.next_link, None

        return tasks

    async def fetch_due_tasks(self) -> List[TodoTask]:
        """
        Fetch all due, unfinished tasks across every list.

        Order is list enumeration order, then Graph's order within a list.

        Raises:
            AuthError: If no access token can be obtained
            UpstreamError: If any list or task request fails; nothing partial
                is returned
        """
        access_token = await self.token_provider.get()

        due: List[TodoTask] = []
        async with self._new_http_client() as client:
            task_lists = await self.list_task_lists(client, access_token)

            async for task_list in throttled(task_lists, self.list_delay, sleep=self._sleep):
                tasks = await self.list_tasks(client, access_token, task_list.id)
                kept = [t for t in tasks if t.is_due()]
                logger.debug(
                    f"List {task_list.display_name or task_list.id}: "
                    f"{len(kept)}/{len(tasks)} tasks due"
                )
                due.extend(kept)

        logger.info(f"Fetched {len(due)} due tasks from {len(task_lists)} lists")
        return due
