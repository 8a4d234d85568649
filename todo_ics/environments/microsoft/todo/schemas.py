"""
Microsoft To Do Schemas - Graph todoTaskList and todoTask resources.

Only the fields the feed needs are modelled; Graph sends more and they are
ignored.

Reference: https://learn.microsoft.com/graph/api/resources/todotask
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class DateTimeTimeZone(BaseModel):
    """
    Graph dateTimeTimeZone value.

    dateTime is a naive ISO string such as "2024-03-15T00:00:00.0000000";
    timeZone names the zone it is expressed in ("UTC", "Pacific Standard Time").
    """
    model_config = ConfigDict(populate_by_name=True)

    date_time: Optional[str] = Field(None, alias="dateTime")
    time_zone: Optional[str] = Field(None, alias="timeZone")


class TodoTaskList(BaseModel):
    """A To Do list (e.g., "Tasks", "Groceries")."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="List identifier")
    display_name: Optional[str] = Field(None, alias="displayName")


class TodoTask(BaseModel):
    """
    A To Do task.

    status is free text from Graph ("notStarted", "inProgress", "completed",
    "waitingOnOthers", "deferred") and is compared case-insensitively.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Task identifier")
    title: Optional[str] = Field(None, description="Task title")
    status: Optional[str] = Field(None, description="Task status")
    due_date_time: Optional[DateTimeTimeZone] = Field(None, alias="dueDateTime")
    last_modified_date_time: Optional[str] = Field(None, alias="lastModifiedDateTime")
    categories: Optional[List[str]] = Field(None)

    @property
    def due(self) -> Optional[str]:
        """Raw due timestamp string, or None when the task has no due date."""
        if self.due_date_time and self.due_date_time.date_time:
            return self.due_date_time.date_time
        return None

    def is_completed(self) -> bool:
        return (self.status or "").lower() == "completed"

    def is_due(self) -> bool:
        """True for a task with a due date that is not completed."""
        return bool(self.due) and not self.is_completed()


class TodoTaskListsResponse(BaseModel):
    """Envelope of GET /me/todo/lists."""
    model_config = ConfigDict(populate_by_name=True)

    value: List[TodoTaskList] = Field(default_factory=list)
    next_link: Optional[str] = Field(None, alias="@odata.nextLink")


class TodoTasksResponse(BaseModel):
    """Envelope of GET /me/todo/lists/{id}/tasks."""
    model_config = ConfigDict(populate_by_name=True)

    value: List[TodoTask] = Field(default_factory=list)
    next_link: Optional[str] = Field(None, alias="@odata.nextLink")
