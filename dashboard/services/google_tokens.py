"""
Lifecycle of the Google OAuth credential shared by every request.

The service owns the only in-memory copy of the credential. It is swapped as a
whole record after each exchange or refresh, and concurrent callers that find
it expired share a single refresh.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from google.oauth2.credentials import Credentials

from dashboard.clients.credential_store import CredentialStore
from dashboard.clients.google_auth import GoogleOAuthClient, OAuthTokenExchangeError
from dashboard.core.errors import AuthExchangeError, AuthRequiredError, RefreshError
from dashboard.models.credentials import CredentialRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GoogleTokenService:
    """Authorize, persist, and refresh the dashboard's Google credential."""

    def __init__(
        self,
        store: CredentialStore,
        oauth_client: GoogleOAuthClient,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._oauth = oauth_client
        self._clock = clock
        self._credential: Optional[CredentialRecord] = None
        self._refresh_task: Optional[asyncio.Task[CredentialRecord]] = None

    @property
    def current(self) -> Optional[CredentialRecord]:
        """The credential held in memory, without consulting storage."""
        return self._credential

    async def _load_current(self) -> Optional[CredentialRecord]:
        """Return the active credential, reading it from storage on first use."""
        if self._credential is None:
            loaded = await asyncio.to_thread(self._store.load)
            # A sign-in or refresh may have finished while the file was read.
            if self._credential is None:
                self._credential = loaded
        return self._credential

    def authorization_url(self) -> str:
        """Consent URL requesting offline access for the configured scopes."""
        return self._oauth.build_authorization_url(access_type="offline")

    async def complete_authorization(self, code: Optional[str]) -> CredentialRecord:
        """Exchange an authorization code and make the result the active credential."""
        if not code:
            raise AuthExchangeError("No authorization code received")

        issued_at = self._clock()
        try:
            grant = await self._oauth.exchange_authorization_code(code)
        except OAuthTokenExchangeError as exc:
            logger.error("Error getting access token: %s", exc)
            raise AuthExchangeError(details=str(exc)) from exc

        record = CredentialRecord.from_grant(
            access_token=grant.access_token,
            refresh_token=grant.refresh_token,
            expires_in=grant.expires_in,
            scope=grant.scope,
            issued_at=issued_at,
            fallback_scopes=self._oauth.scopes,
        )
        await asyncio.to_thread(self._store.save, record)
        self._credential = record
        return record

    async def is_authenticated(self) -> bool:
        """True when a credential exists and is fresh or could be refreshed."""
        if await self._load_current() is None:
            return False
        try:
            await self.ensure_fresh()
        except RefreshError:
            return False
        return True

    async def ensure_fresh(self) -> CredentialRecord:
        """Return a non-expired credential, refreshing only when expiry has passed."""
        credential = await self._load_current()
        if credential is None:
            raise AuthRequiredError()
        if not credential.is_expired(self._clock()):
            return credential

        if self._refresh_task is None:
            task = asyncio.create_task(self._refresh(credential))
            task.add_done_callback(self._forget_refresh)
            self._refresh_task = task
        # Waiters must not cancel the shared refresh when they are cancelled.
        return await asyncio.shield(self._refresh_task)

    async def get_credentials(self) -> Credentials:
        """Google SDK credentials built from a fresh access token."""
        credential = await self.ensure_fresh()
        return Credentials(token=credential.access_token, scopes=list(credential.scopes))

    async def _refresh(self, stale: CredentialRecord) -> CredentialRecord:
        if not stale.refresh_token:
            raise RefreshError(details="No refresh token stored; sign in again.")

        refreshed_at = self._clock()
        logger.info("Access token expired; refreshing")
        try:
            grant = await self._oauth.refresh_token(stale.refresh_token)
        except OAuthTokenExchangeError as exc:
            logger.error("Error refreshing token: %s", exc)
            raise RefreshError(details=str(exc)) from exc

        record = CredentialRecord.from_grant(
            access_token=grant.access_token,
            refresh_token=grant.refresh_token or stale.refresh_token,
            expires_in=grant.expires_in,
            scope=grant.scope,
            issued_at=refreshed_at,
            fallback_scopes=stale.scopes,
        )
        await asyncio.to_thread(self._store.save, record)
        self._credential = record
        return record

    def _forget_refresh(self, task: asyncio.Task) -> None:
        if self._refresh_task is task:
            self._refresh_task = None
        if not task.cancelled():
            # Mark the exception retrieved; waiters already received it.
            task.exception()


__all__ = ["GoogleTokenService"]
