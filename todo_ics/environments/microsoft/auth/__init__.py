"""
Microsoft Auth Module - refresh-token grant and the in-memory token cache.
"""

from todo_ics.environments.microsoft.auth.client import MicrosoftAuthClient
from todo_ics.environments.microsoft.auth.schemas import MicrosoftTokenResponse
from todo_ics.environments.microsoft.auth.token_provider import TokenProvider

__all__ = [
    "MicrosoftAuthClient",
    "MicrosoftTokenResponse",
    "TokenProvider",
]
