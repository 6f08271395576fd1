"""File-backed persistence for the single OAuth credential record."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from dashboard.models.credentials import CredentialRecord

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)


class CredentialStore:
    """Read and write the credential record as JSON with encrypted tokens."""

    def __init__(self, path: str | Path, cipher: "TokenCipherService") -> None:
        self._path = Path(path)
        self._cipher = cipher

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[CredentialRecord]:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            refresh_encrypted = data.get("refresh_token_encrypted")
            return CredentialRecord(
                access_token=self._cipher.decrypt(data["access_token_encrypted"]),
                refresh_token=(
                    self._cipher.decrypt(refresh_encrypted) if refresh_encrypted else None
                ),
                expires_at=data.get("expires_at"),
                scopes=tuple(data.get("scopes") or ()),
            )
        except (OSError, KeyError, ValueError, PydanticValidationError) as exc:
            logger.error("Error loading saved token from %s: %s", self._path, exc)
            return None

    def save(self, record: CredentialRecord) -> None:
        data = {
            "access_token_encrypted": self._cipher.encrypt(record.access_token),
            "refresh_token_encrypted": (
                self._cipher.encrypt(record.refresh_token) if record.refresh_token else None
            ),
            "expires_at": record.expires_at.isoformat() if record.expires_at else None,
            "scopes": list(record.scopes),
        }
        if self._path.parent and not self._path.parent.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp_path, self._path)
        logger.info("Token stored to %s", self._path)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


__all__ = ["CredentialStore"]
