"""
Domain model for the persisted OAuth credential.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CredentialRecord(BaseModel):
    """A complete Google token set; replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = Field(
        None, description="Absolute expiry; None means the token never expires."
    )
    scopes: tuple[str, ...] = ()

    @field_validator("expires_at")
    @classmethod
    def _ensure_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_grant(
        cls,
        *,
        access_token: str,
        refresh_token: Optional[str],
        expires_in: Optional[int],
        scope: Optional[str],
        issued_at: datetime,
        fallback_scopes: tuple[str, ...] = (),
    ) -> "CredentialRecord":
        expires_at = issued_at + timedelta(seconds=expires_in) if expires_in else None
        scopes = tuple(sorted(scope.split())) if scope else tuple(fallback_scopes)
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=expires_at,
            scopes=scopes,
        )

    def is_expired(self, now: datetime) -> bool:
        """Return True once ``now`` reaches the expiry instant."""
        if self.expires_at is None:
            return False
        return self.expires_at <= now


__all__ = ["CredentialRecord"]
