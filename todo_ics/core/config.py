"""
Configuration module - centralized settings for the feed service.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from todo_ics.environments.base import ConfigError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    Minimal .env for a refreshable setup:
        CLIENT_ID=00000000-0000-0000-0000-000000000000
        REFRESH_TOKEN=M.C5_BAY...
        ICS_TOKEN=some-long-random-string
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "To Do Due ICS"

    # LOG_LEVEL: Root level for the todo_ics.* loggers
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ---------------------------------------------------------------------------
    # MICROSOFT IDENTITY SETTINGS
    # ---------------------------------------------------------------------------
    # CLIENT_ID: Application (client) ID from the Azure app registration
    CLIENT_ID: str = ""

    # AUTH_TENANT: Authority segment of the token URL
    # - "consumers" for personal accounts only, "common" for org + personal
    AUTH_TENANT: str = "common"

    # AUTH_SCOPES: Space-separated scopes sent with the refresh grant
    AUTH_SCOPES: str = "https://graph.microsoft.com/Tasks.Read offline_access"

    # ACCESS_TOKEN: Static bearer token, used as-is when no REFRESH_TOKEN is set
    ACCESS_TOKEN: str = ""

    # REFRESH_TOKEN: Long-lived token obtained once via the device-code flow.
    # If Microsoft rotates it, the new value is logged and must be copied here.
    REFRESH_TOKEN: str = ""

    # ---------------------------------------------------------------------------
    # FEED SETTINGS
    # ---------------------------------------------------------------------------
    # ICS_TOKEN: Shared secret expected in ?token=...
    # Empty means the feed is served without any check.
    ICS_TOKEN: str = ""

    # OUTLOOK_TZ: Windows timezone name sent in the Prefer header
    OUTLOOK_TZ: str = "Pacific Standard Time"

    # ---------------------------------------------------------------------------
    # UPSTREAM REQUEST SETTINGS
    # ---------------------------------------------------------------------------
    # Seconds to wait between consecutive per-list requests
    LIST_REQUEST_DELAY: float = 0.1

    # $top value for task requests (one page)
    TASKS_PAGE_SIZE: int = 100

    HTTP_TIMEOUT: float = 30.0

    def validate_startup(self) -> List[str]:
        """Validate required configuration. Returns list of problems."""
        problems = []

        if not self.CLIENT_ID:
            problems.append("CLIENT_ID is required")

        if not self.ACCESS_TOKEN and not self.REFRESH_TOKEN:
            problems.append("ACCESS_TOKEN or REFRESH_TOKEN is required")

        return problems

    def get_scopes_list(self) -> List[str]:
        return self.AUTH_SCOPES.split()


def require_valid_settings(config: Settings) -> Settings:
    """Raise ConfigError if the settings cannot run the feed."""
    problems = config.validate_startup()
    if problems:
        raise ConfigError(problems)
    return config


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from todo_ics.core.config import settings
settings = Settings()
