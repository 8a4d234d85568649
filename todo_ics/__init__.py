"""
todo_ics - Microsoft To Do due dates as an iCalendar subscription feed.
"""

__version__ = "0.1.0"
