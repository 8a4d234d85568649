"""
Dependencies module - reusable FastAPI dependencies for route handlers.

The token provider is created once at startup and kept on app.state; every
request builds a fresh TodoClient/FeedService around it. Tests swap any of
these through app.dependency_overrides.
"""

from fastapi import Depends, Request

from todo_ics.core.config import Settings, settings
from todo_ics.environments.microsoft.auth.token_provider import TokenProvider
from todo_ics.environments.microsoft.todo.client import TodoClient
from todo_ics.services.feed_service import FeedService


def get_settings(request: Request) -> Settings:
    """Return the settings the running app was created with."""
    return getattr(request.app.state, "settings", None) or settings


def get_token_provider(request: Request) -> TokenProvider:
    """Return the token provider owned by the running app."""
    return request.app.state.token_provider


def get_feed_service(
    token_provider: TokenProvider = Depends(get_token_provider),
) -> FeedService:
    """Build the fetch -> build pipeline for one request."""
    return FeedService(todo_client=TodoClient(token_provider=token_provider))
