"""
Microsoft identity platform schemas - token endpoint responses.

Reference: https://learn.microsoft.com/entra/identity-platform/v2-oauth2-auth-code-flow#refresh-the-access-token
"""

from typing import Optional, List
from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# TOKEN RESPONSES
# ---------------------------------------------------------------------------

class MicrosoftTokenResponse(BaseModel):
    """
    Response from the /oauth2/v2.0/token endpoint.

    Example response for a refresh_token grant:
    {
        "token_type": "Bearer",
        "scope": "https://graph.microsoft.com/Tasks.Read",
        "expires_in": 3600,
        "access_token": "EwBwA8l6BAAU...",
        "refresh_token": "M.C5_BAY.0.U.-Cg..."
    }

    refresh_token is only present when the identity platform rotates it.
    """
    access_token: str = Field(..., description="OAuth access token")
    token_type: str = Field(default="Bearer", description="Token type (usually Bearer)")
    expires_in: Optional[int] = Field(None, description="Seconds until expiration")
    refresh_token: Optional[str] = Field(None, description="Rotated refresh token")
    scope: Optional[str] = Field(None, description="Space-separated scopes granted")

    def get_scopes_list(self) -> List[str]:
        """Convert space-separated scope string to list."""
        if self.scope:
            return self.scope.split()
        return []
