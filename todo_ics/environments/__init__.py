"""
Environments Module - External Service Integrations

environments/
├── __init__.py           # Module exports
├── base.py               # Shared errors and token data
└── microsoft/            # Microsoft identity platform + To Do
"""

from todo_ics.environments.base import (
    EnvironmentError,
    ConfigError,
    AuthError,
    UpstreamError,
    OAuthTokens,
)

__all__ = [
    "EnvironmentError",
    "ConfigError",
    "AuthError",
    "UpstreamError",
    "OAuthTokens",
]
