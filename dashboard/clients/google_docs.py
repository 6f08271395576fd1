"""Google Docs client wrapper."""

from __future__ import annotations

import asyncio
from typing import Iterable, TYPE_CHECKING

from dashboard.clients.google_api import build_service

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.services.google_tokens import GoogleTokenService


class GoogleDocsClient:
    """Insert text into an existing document."""

    def __init__(self, token_service: "GoogleTokenService") -> None:
        self._token_service = token_service

    async def insert_lines(self, *, document_id: str, lines: Iterable[str]) -> None:
        """Insert each line at the start of the body in one batchUpdate."""
        credentials = await self._token_service.get_credentials()
        requests = [
            {"insertText": {"location": {"index": 1}, "text": f"{line}\n"}}
            for line in lines
        ]

        def _execute_update() -> None:
            service = build_service("docs", "v1", credentials)
            service.documents().batchUpdate(
                documentId=document_id, body={"requests": requests}
            ).execute()

        await asyncio.to_thread(_execute_update)


__all__ = ["GoogleDocsClient"]
