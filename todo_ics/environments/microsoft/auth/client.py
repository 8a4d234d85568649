"""
Microsoft OAuth Client - refresh-token grant against the identity platform.

Only the refresh exchange lives here. The initial tokens come from a one-off
device-code login done outside this service and are supplied through
configuration.

References:
===========
- Token endpoint: https://login.microsoftonline.com/{tenant}/oauth2/v2.0/token
"""

import logging
from typing import List, Optional

import httpx

from todo_ics.core.config import settings
from todo_ics.environments.base import OAuthTokens, AuthError
from todo_ics.environments.microsoft.auth.schemas import MicrosoftTokenResponse


logger = logging.getLogger("todo_ics.environments.microsoft.auth")


class MicrosoftAuthClient:
    """
    Microsoft identity platform client for a public (no secret) application.

    Example Usage:
        client = MicrosoftAuthClient(client_id="...", tenant="consumers")
        tokens = await client.refresh_access_token(refresh_token="M.C5_...")
    """

    AUTHORITY_URL = "https://login.microsoftonline.com"

    def __init__(
        self,
        client_id: Optional[str] = None,
        tenant: Optional[str] = None,
        scopes: Optional[List[str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            client_id: Azure application (client) ID (defaults to settings)
            tenant: Authority tenant such as "common" or "consumers"
            scopes: Scopes requested with the refresh grant
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.client_id = client_id or settings.CLIENT_ID
        self.tenant = tenant or settings.AUTH_TENANT
        self.scopes = scopes if scopes is not None else settings.get_scopes_list()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self._transport = transport

        if not self.client_id:
            logger.warning("Microsoft OAuth not configured. Set CLIENT_ID in environment variables.")

    @property
    def token_url(self) -> str:
        return f"{self.AUTHORITY_URL}/{self.tenant}/oauth2/v2.0/token"

    # -------------------------------------------------------------------------
    # TOKEN REFRESH
    # -------------------------------------------------------------------------

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use a refresh token to get a new access token.

        Args:
            refresh_token: The refresh token from the initial login

        Returns:
            OAuthTokens with the new access_token. refresh_token is set only
            when the identity platform rotated it.

        Raises:
            AuthError: If the endpoint answers with a non-success status or
                cannot be reached
        """
        refresh_data = {
            "client_id": self.client_id,
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "scope": " ".join(self.scopes),
        }

        logger.info("Refreshing access token")

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(self.token_url, data=refresh_data)
            except httpx.RequestError as e:
                logger.error(f"Network error during token refresh: {e}")
                raise AuthError(f"Network error: {e}")

        if not response.is_success:
            logger.error(f"Token refresh failed: {response.status_code} {response.text}")
            raise AuthError(
                f"Token refresh failed: {response.status_code} {response.text}",
                status_code=response.status_code,
                response=response.text,
            )

        token_response = MicrosoftTokenResponse(**response.json())

        logger.info(
            "Successfully refreshed access token",
            extra={"expires_in": token_response.expires_in},
        )

        return OAuthTokens(
            access_token=token_response.access_token,
            token_type=token_response.token_type,
            refresh_token=token_response.refresh_token,
            expires_in=token_response.expires_in,
            scopes=token_response.get_scopes_list(),
        )
