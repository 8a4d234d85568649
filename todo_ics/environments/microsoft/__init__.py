"""
Microsoft Environment Module - Microsoft Graph integration.

Architecture:
=============
microsoft/
├── __init__.py           # Module exports
├── auth/                 # Identity platform
│   ├── client.py         # Refresh-token grant
│   ├── schemas.py        # Token endpoint response
│   └── token_provider.py # In-memory token cache
└── todo/                 # Microsoft To Do (Graph /me/todo)
    ├── client.py         # Lists + tasks enumeration
    └── schemas.py        # Task data structures

Usage:
======
    from todo_ics.environments.microsoft import TokenProvider, TodoClient

    provider = TokenProvider(refresh_token="M.C5_...")
    client = TodoClient(token_provider=provider)
    tasks = await client.fetch_due_tasks()
"""

from todo_ics.environments.microsoft.auth import MicrosoftAuthClient, TokenProvider
from todo_ics.environments.microsoft.todo import TodoClient, TodoTask, TodoTaskList

__all__ = [
    "MicrosoftAuthClient",
    "TokenProvider",
    "TodoClient",
    "TodoTask",
    "TodoTaskList",
]
