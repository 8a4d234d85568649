"""
Microsoft To Do Module - Graph /me/todo API integration.

Features:
=========
- Enumerate the signed-in user's task lists
- Enumerate tasks per list, following @odata.nextLink pages
- Filter to due, unfinished tasks
"""

from todo_ics.environments.microsoft.todo.client import TodoClient
from todo_ics.environments.microsoft.todo.schemas import (
    DateTimeTimeZone,
    TodoTask,
    TodoTaskList,
)

__all__ = [
    "TodoClient",
    "DateTimeTimeZone",
    "TodoTask",
    "TodoTaskList",
]
