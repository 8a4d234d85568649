"""
Token Provider - hands out a valid Graph access token.

Two modes, chosen by configuration:

- Static: only ACCESS_TOKEN is set. The token is returned unchanged on every
  call; nothing tracks its expiry.
- Refreshable: REFRESH_TOKEN is set. The provider caches the access token
  with an expiry of (expires_in - 60s) and runs a refresh grant whenever the
  cache is empty or expired.

The provider is created once per process (see todo_ics.main) and passed to
the fetch pipeline, so tests can build one with a fake clock and auth client.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from todo_ics.core.logging import preview_secret
from todo_ics.environments.base import AuthError
from todo_ics.environments.microsoft.auth.client import MicrosoftAuthClient


logger = logging.getLogger("todo_ics.environments.microsoft.token_provider")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenProvider:
    """
    In-memory credential cache with on-demand refresh.

    Attributes:
        access_token: Currently cached (or static) access token
        expires_at: Instant after which the cached token is refreshed;
            None in static mode or before the first refresh
    """

    # Refresh this long before the token actually expires
    EXPIRY_MARGIN = timedelta(seconds=60)

    def __init__(
        self,
        access_token: str = "",
        refresh_token: str = "",
        auth_client: Optional[MicrosoftAuthClient] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.access_token = access_token or None
        self.refresh_token = refresh_token or None
        self.expires_at: Optional[datetime] = None
        self._auth_client = auth_client
        self._clock = clock

    @property
    def is_static(self) -> bool:
        """True when there is no refresh token to renew the access token with."""
        return self.refresh_token is None

    def is_expired(self) -> bool:
        if self.access_token is None or self.expires_at is None:
            return True
        return self._clock() >= self.expires_at

    async def get(self) -> str:
        """
        Return a usable access token, refreshing it first if needed.

        Raises:
            AuthError: If no credential is configured or the refresh fails
        """
        if self.is_static:
            if not self.access_token:
                raise AuthError("No access token or refresh token configured")
            return self.access_token

        if not self.is_expired():
            return self.access_token

        return await self.refresh()

    async def refresh(self) -> str:
        """
        Run one refresh grant and replace the cached token.

        A rotated refresh token is only logged. The configured one keeps
        being used until the operator updates REFRESH_TOKEN.

        Raises:
            AuthError: If no refresh token is configured or the grant fails
        """
        if self.refresh_token is None:
            raise AuthError("No refresh token configured")

        if self._auth_client is None:
            self._auth_client = MicrosoftAuthClient()

        tokens = await self._auth_client.refresh_access_token(self.refresh_token)

        now = self._clock()
        lifetime = timedelta(seconds=tokens.expires_in or 0)
        self.access_token = tokens.access_token
        self.expires_at = now + lifetime - self.EXPIRY_MARGIN

        if tokens.refresh_token and tokens.refresh_token != self.refresh_token:
            logger.warning(
                "Identity platform returned a new refresh token "
                f"({preview_secret(tokens.refresh_token)}). Re-run the device-code "
                "login and update REFRESH_TOKEN; the configured one keeps being "
                "used until then."
            )

        logger.info(f"Access token cached until {self.expires_at.isoformat()}")
        return self.access_token
