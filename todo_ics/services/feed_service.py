"""
Feed Service - fetch due tasks and render them as calendar text.

One call runs the whole pipeline:

    TokenProvider -> TodoClient.fetch_due_tasks -> CalendarBuilder -> str

Errors are not handled here; the feed endpoint turns them into HTTP 500.
"""

import logging
from typing import Optional

from todo_ics.environments.microsoft.todo.client import TodoClient
from todo_ics.services.calendar_builder import CalendarBuilder


logger = logging.getLogger("todo_ics.services.feed")


class FeedService:
    """Orchestrates fetch -> build -> serialize for one feed request."""

    def __init__(
        self,
        todo_client: TodoClient,
        builder: Optional[CalendarBuilder] = None,
    ):
        self.todo_client = todo_client
        self.builder = builder or CalendarBuilder()

    async def render_feed(self) -> str:
        """
        Run the pipeline and return the serialized calendar.

        Raises:
            AuthError: No usable access token
            UpstreamError: A To Do API request failed
        """
        tasks = await self.todo_client.fetch_due_tasks()
        calendar = self.builder.build_calendar(tasks)
        return self.builder.serialize(calendar)
