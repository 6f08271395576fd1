"""Google Drive client wrapper for listing Docs and Sheets files."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from dashboard.clients.google_api import build_service

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.services.google_tokens import GoogleTokenService

DOCUMENT_MIME_TYPE = "application/vnd.google-apps.document"
SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"


class GoogleDriveClient:
    """List the user's Drive files of a given Google Workspace type."""

    def __init__(self, token_service: "GoogleTokenService") -> None:
        self._token_service = token_service

    async def list_files(
        self,
        *,
        mime_type: str,
        page_size: int,
        page_token: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """Return one page of ``{id, name, modifiedTime}`` files, newest first."""
        credentials = await self._token_service.get_credentials()

        def _execute_list() -> Tuple[List[Dict[str, Any]], Optional[str]]:
            service = build_service("drive", "v3", credentials)
            params: Dict[str, Any] = {
                "q": f"mimeType='{mime_type}'",
                "fields": "files(id, name, modifiedTime), nextPageToken",
                "orderBy": "modifiedTime desc",
                "pageSize": page_size,
            }
            if page_token:
                params["pageToken"] = page_token
            response = service.files().list(**params).execute()
            return response.get("files", []), response.get("nextPageToken")

        return await asyncio.to_thread(_execute_list)


def summarize_file(file: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a Drive file as ``{id, title, modifiedTime}``."""
    return {
        "id": file["id"],
        "title": file.get("name"),
        "modifiedTime": file.get("modifiedTime"),
    }


__all__ = [
    "DOCUMENT_MIME_TYPE",
    "GoogleDriveClient",
    "SPREADSHEET_MIME_TYPE",
    "summarize_file",
]
