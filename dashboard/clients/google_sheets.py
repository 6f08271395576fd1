"""Google Sheets client wrapper for appending rows."""

from __future__ import annotations

import asyncio
from typing import Any, List, TYPE_CHECKING

from dashboard.clients.google_api import build_service

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.services.google_tokens import GoogleTokenService


class GoogleSheetsClient:
    """Append rows to a spreadsheet."""

    def __init__(self, token_service: "GoogleTokenService") -> None:
        self._token_service = token_service

    async def append_row(
        self,
        *,
        spreadsheet_id: str,
        sheet_range: str,
        values: List[Any],
    ) -> str:
        """Append ``values`` as one row and return the updated range."""
        credentials = await self._token_service.get_credentials()

        def _execute_append() -> str:
            service = build_service("sheets", "v4", credentials)
            result = (
                service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=spreadsheet_id,
                    range=sheet_range,
                    valueInputOption="USER_ENTERED",
                    body={"values": [values]},
                )
                .execute()
            )
            updates = result.get("updates", {})
            return updates.get("updatedRange") or updates.get("tableRange") or ""

        return await asyncio.to_thread(_execute_append)


__all__ = ["GoogleSheetsClient"]
