"""
Calendar Builder - turn due To Do tasks into an iCalendar feed.

Each task becomes one all-day VEVENT on its due date. Only the date part of
the due timestamp is used: "2024-03-15T00:00:00" is due on 2024-03-15 no
matter which timeZone Graph attached, so no timezone conversion happens and
the build host's local zone never shifts a date.

Output:
=======
    BEGIN:VCALENDAR
    VERSION:2.0
    PRODID:-//your-name//todo-due-ics//EN
    CALSCALE:GREGORIAN
    METHOD:PUBLISH
    ...
    BEGIN:VEVENT
    UID:todo-AAMkAG...
    DTSTART;VALUE=DATE:20240315
    DTEND;VALUE=DATE:20240316
    SUMMARY:Pay rent
    DESCRIPTION:#bills\\nSource: Microsoft To Do
    END:VEVENT
    END:VCALENDAR
"""

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

from icalendar import Calendar, Event, vDuration

from todo_ics.environments.microsoft.todo.schemas import TodoTask


logger = logging.getLogger("todo_ics.services.calendar_builder")


CALENDAR_NAME = "To Do – Due Dates"
PRODUCT_ID = "-//your-name//todo-due-ics//EN"
UID_PREFIX = "todo-"
UNTITLED_SUMMARY = "(untitled task)"
SOURCE_LINE = "Source: Microsoft To Do"
REFRESH_INTERVAL = timedelta(minutes=30)

# Graph sends 7 fractional digits ("2024-01-02T10:20:30.1234567Z").
# Python 3.10 fromisoformat only takes 3 or 6, so fractions become 6 digits
_FRACTION_RE = re.compile(r"\.(\d+)")


def event_uid(task_id: str) -> str:
    """Stable UID for a task, so clients update events in place."""
    return f"{UID_PREFIX}{task_id}"


def parse_due_date(due: Optional[str]) -> Optional[date]:
    """
    Calendar date of a due timestamp, from its first 10 characters.

    Returns None when the value is missing or does not start with YYYY-MM-DD.
    """
    if not due:
        return None
    try:
        return date.fromisoformat(due[:10])
    except ValueError:
        return None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a Graph ISO 8601 timestamp into an aware UTC datetime."""
    if not value:
        return None
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value.strip())
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def build_description(task: TodoTask) -> str:
    """Category hash-tags (if any) on the first line, then the source line."""
    if task.categories:
        tags = " ".join(f"#{category}" for category in task.categories)
        return f"{tags}\n{SOURCE_LINE}"
    return SOURCE_LINE


class CalendarBuilder:
    """
    Builds the iCalendar document for a list of tasks.

    Pure: no network, no state kept between builds. The clock supplies
    DTSTAMP, the time the feed was built.

    Attributes:
        name: Calendar display name
        product_id: PRODID value
        refresh_interval: Suggested client polling interval
    """

    def __init__(
        self,
        name: str = CALENDAR_NAME,
        product_id: str = PRODUCT_ID,
        refresh_interval: timedelta = REFRESH_INTERVAL,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.name = name
        self.product_id = product_id
        self.refresh_interval = refresh_interval
        self._clock = clock

    def _new_calendar(self) -> Calendar:
        cal = Calendar()
        cal.add("prodid", self.product_id)
        cal.add("version", "2.0")
        cal.add("calscale", "GREGORIAN")
        cal.add("method", "PUBLISH")
        cal.add("name", self.name)
        cal.add("x-wr-calname", self.name)

        # Refresh hints: RFC 7986 REFRESH-INTERVAL plus the Outlook/Apple TTL
        refresh = vDuration(self.refresh_interval)
        refresh.params["VALUE"] = "DURATION"
        cal.add("refresh-interval", refresh)
        cal.add("x-published-ttl", vDuration(self.refresh_interval))
        return cal

    def build_event(self, task: TodoTask) -> Optional[Event]:
        """
        Map one task to an all-day event.

        Returns None for tasks without a usable due date.
        """
        start = parse_due_date(task.due)
        if start is None:
            if task.due:
                logger.warning(f"Skipping task {task.id}: unreadable due date {task.due!r}")
            return None

        last_modified = parse_timestamp(task.last_modified_date_time)

        event = Event()
        event.add("uid", event_uid(task.id))
        event.add("dtstamp", self._clock())
        event.add("dtstart", start)
        event.add("dtend", start + timedelta(days=1))
        event.add("summary", task.title or UNTITLED_SUMMARY)
        event.add("description", build_description(task))
        if last_modified is not None:
            event.add("last-modified", last_modified)
        return event

    def build_calendar(self, tasks: Iterable[TodoTask]) -> Calendar:
        """Build a calendar with one all-day event per due task."""
        cal = self._new_calendar()
        count = 0
        for task in tasks:
            event = self.build_event(task)
            if event is None:
                continue
            cal.add_component(event)
            count += 1

        logger.info(f"Built calendar with {count} events")
        return cal

    @staticmethod
    def serialize(calendar: Calendar) -> str:
        """Render the calendar as RFC 5545 text."""
        return calendar.to_ical().decode("utf-8")
