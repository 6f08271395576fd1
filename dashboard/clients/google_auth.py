"""
Google OAuth utilities.

These helpers build the consent URL and talk to Google's token endpoint for
the authorization-code and refresh-token grants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import httpx

from fastapi import status

from dashboard.core.config import GoogleSettings, OAuthSettings


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint returns an error."""


@dataclass(frozen=True)
class TokenGrant:
    """Fields returned by Google's token endpoint."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None


class GoogleOAuthClient:
    """Build Google authorization URLs and exchange authorization codes."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._google = google_settings
        self._oauth = oauth_settings
        self._transport = transport

    @property
    def scopes(self) -> tuple[str, ...]:
        return tuple(self._oauth.scopes)

    def build_authorization_url(self, access_type: str = "offline") -> str:
        """Construct the Google OAuth consent URL."""
        params = {
            "client_id": self._google.client_id,
            "redirect_uri": str(self._google.redirect_uri),
            "response_type": "code",
            "scope": " ".join(self._oauth.scopes),
            "access_type": access_type,
            "include_granted_scopes": "true",
            "prompt": "consent",
        }
        query = urlencode(params)
        return f"{self.AUTH_BASE_URL}?{query}"

    async def exchange_authorization_code(self, code: str) -> TokenGrant:
        """Exchange an authorization code for tokens."""
        payload = {
            "code": code,
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "redirect_uri": str(self._google.redirect_uri),
            "grant_type": "authorization_code",
        }
        return await self._post_token_request(payload)

    async def refresh_token(self, refresh_token: str) -> TokenGrant:
        """Refresh the access token using a stored refresh token."""
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }
        return await self._post_token_request(payload)

    async def _post_token_request(self, payload: dict) -> TokenGrant:
        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                response = await client.post(self.TOKEN_URL, data=payload)
        except httpx.HTTPError as exc:
            raise OAuthTokenExchangeError(f"Token endpoint unreachable: {exc}") from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthTokenExchangeError(response.text)

        token_payload = response.json()
        access_token = token_payload.get("access_token")
        if not access_token:
            raise OAuthTokenExchangeError("Incomplete token payload returned from Google.")

        expires_in = token_payload.get("expires_in")
        return TokenGrant(
            access_token=access_token,
            refresh_token=token_payload.get("refresh_token"),
            expires_in=int(expires_in) if expires_in else None,
            scope=token_payload.get("scope"),
        )


__all__ = [
    "GoogleOAuthClient",
    "OAuthTokenExchangeError",
    "TokenGrant",
]
