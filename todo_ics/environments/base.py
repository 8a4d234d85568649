"""
Base classes and errors for Environment integrations.

This module defines the exceptions and data structures shared by the
Microsoft authentication client, the To Do client and the feed pipeline.

Error Taxonomy:
===============
- ConfigError: Startup configuration is missing or invalid (fatal)
- AuthError: No usable credential, or the token endpoint rejected a refresh
- UpstreamError: The task-list API answered with a non-success status

AuthError and UpstreamError are raised by the integration clients and only
caught at the feed endpoint, where they become a generic HTTP 500.
"""

from dataclasses import dataclass
from typing import Optional, List, Any


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class ConfigError(EnvironmentError):
    """Raised at startup when required configuration is missing."""

    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems) or "invalid configuration")
        self.problems = problems


class AuthError(EnvironmentError):
    """Raised when no usable access token can be produced."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class UpstreamError(EnvironmentError):
    """Raised when a call to the task-list API fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class OAuthTokens:
    """
    Token data returned by the authorization endpoint.

    expires_in is the raw lifetime in seconds; the token provider turns it
    into an expiry instant using its own clock.
    """
    access_token: str
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scopes: Optional[List[str]] = None
