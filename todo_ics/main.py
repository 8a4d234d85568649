"""
Main application entry point - FastAPI app instance and configuration.
Run with: python -m todo_ics   (or: uvicorn todo_ics.main:app --port 3000)
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from todo_ics.core.config import Settings, require_valid_settings, settings
from todo_ics.core.logging import preview_secret, setup_logging
from todo_ics.environments.base import ConfigError
from todo_ics.environments.microsoft.auth.client import MicrosoftAuthClient
from todo_ics.environments.microsoft.auth.token_provider import TokenProvider
from todo_ics.routers import feed


logger = logging.getLogger("todo_ics.main")


def build_token_provider(config: Settings) -> TokenProvider:
    """Create the process-wide token provider from configuration."""
    auth_client = None
    if config.REFRESH_TOKEN:
        auth_client = MicrosoftAuthClient(
            client_id=config.CLIENT_ID,
            tenant=config.AUTH_TENANT,
            scopes=config.get_scopes_list(),
            timeout=config.HTTP_TIMEOUT,
        )
    return TokenProvider(
        access_token=config.ACCESS_TOKEN,
        refresh_token=config.REFRESH_TOKEN,
        auth_client=auth_client,
    )


def feed_url(config: Settings) -> str:
    """Subscription URL shown at startup, with the secret shortened."""
    url = f"http://localhost:{config.PORT}/todo-due.ics"
    if config.ICS_TOKEN:
        url += f"?token={preview_secret(config.ICS_TOKEN)}"
    return url


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Startup validates configuration; a ConfigError aborts startup before any
    request is served.
    """
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            require_valid_settings(config)
        except ConfigError as e:
            for problem in e.problems:
                logger.error(f"Configuration error: {problem}")
            raise

        if getattr(app.state, "token_provider", None) is None:
            app.state.token_provider = build_token_provider(config)

        mode = "static token" if app.state.token_provider.is_static else "refresh token"
        logger.info(f"ICS feed on {feed_url(config)} ({mode})")
        if not config.ICS_TOKEN:
            logger.warning("ICS_TOKEN is empty: the feed is served without authentication")
        yield

    app = FastAPI(title=config.APP_NAME, lifespan=lifespan)
    app.state.settings = config
    app.state.token_provider = None

    app.include_router(feed.router)

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe. Does not touch Microsoft Graph."""
        return {"status": "ok"}

    return app


setup_logging(settings.LOG_LEVEL)

app = create_app()
