"""Calendar reads and the write operations on Calendar, Docs and Sheets."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from dashboard.clients.google_api import upstream_errors

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.clients.google_calendar import GoogleCalendarClient
    from dashboard.clients.google_docs import GoogleDocsClient
    from dashboard.clients.google_sheets import GoogleSheetsClient

logger = logging.getLogger(__name__)


class WorkspaceActionsService:
    """Thin layer mapping Google API failures onto ``UpstreamError``."""

    def __init__(
        self,
        *,
        calendar: "GoogleCalendarClient",
        docs: "GoogleDocsClient",
        sheets: "GoogleSheetsClient",
    ) -> None:
        self._calendar = calendar
        self._docs = docs
        self._sheets = sheets

    async def upcoming_events(self) -> List[Dict[str, Any]]:
        with upstream_errors("fetching calendar events"):
            return await self._calendar.list_upcoming_events(max_results=10)

    async def create_event(
        self,
        *,
        summary: str,
        start_time: str,
        end_time: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        with upstream_errors("creating calendar event"):
            return await self._calendar.create_event(
                summary=summary,
                start_time=start_time,
                end_time=end_time,
                description=description,
            )

    async def append_to_document(self, document_id: str, content: List[str]) -> None:
        with upstream_errors("updating document"):
            await self._docs.insert_lines(document_id=document_id, lines=content)

    async def append_to_spreadsheet(
        self, spreadsheet_id: str, sheet_range: str, values: List[Any]
    ) -> None:
        with upstream_errors("updating spreadsheet"):
            updated_range = await self._sheets.append_row(
                spreadsheet_id=spreadsheet_id, sheet_range=sheet_range, values=values
            )
        logger.info("Appended row to %s (%s)", spreadsheet_id, updated_range or sheet_range)


__all__ = ["WorkspaceActionsService"]
