"""Google Calendar client wrapper."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from dashboard.clients.google_api import build_service

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.services.google_tokens import GoogleTokenService


class GoogleCalendarClient:
    """Read and create events on the user's primary calendar."""

    def __init__(self, token_service: "GoogleTokenService") -> None:
        self._token_service = token_service

    async def list_upcoming_events(self, *, max_results: int = 10) -> List[Dict[str, Any]]:
        """Return the next ``max_results`` single events ordered by start time."""
        credentials = await self._token_service.get_credentials()
        time_min = datetime.now(timezone.utc).isoformat()

        def _execute_list() -> List[Dict[str, Any]]:
            service = build_service("calendar", "v3", credentials)
            response = (
                service.events()
                .list(
                    calendarId="primary",
                    timeMin=time_min,
                    maxResults=max_results,
                    singleEvents=True,
                    orderBy="startTime",
                )
                .execute()
            )
            return response.get("items", [])

        return await asyncio.to_thread(_execute_list)

    async def create_event(
        self,
        *,
        summary: str,
        start_time: str,
        end_time: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Insert a UTC event and return Google's event resource."""
        credentials = await self._token_service.get_credentials()
        event = {
            "summary": summary,
            "description": description,
            "start": {"dateTime": start_time, "timeZone": "UTC"},
            "end": {"dateTime": end_time, "timeZone": "UTC"},
        }

        def _execute_insert() -> Dict[str, Any]:
            service = build_service("calendar", "v3", credentials)
            return service.events().insert(calendarId="primary", body=event).execute()

        return await asyncio.to_thread(_execute_insert)


__all__ = ["GoogleCalendarClient"]
