"""Gmail client wrapper for message summaries and image attachments."""

from __future__ import annotations

import asyncio
import base64
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from dashboard.clients.google_api import build_service

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.services.google_tokens import GoogleTokenService


class GmailClient:
    """Read the signed-in user's mailbox."""

    def __init__(self, token_service: "GoogleTokenService") -> None:
        self._token_service = token_service

    async def list_message_ids(
        self, *, page_token: Optional[str], page_size: int
    ) -> Tuple[List[str], Optional[str]]:
        """Return one page of message ids and the cursor for the next page."""
        credentials = await self._token_service.get_credentials()

        def _execute_list() -> Tuple[List[str], Optional[str]]:
            service = build_service("gmail", "v1", credentials)
            params: Dict[str, Any] = {"userId": "me", "maxResults": page_size}
            if page_token:
                params["pageToken"] = page_token
            response = service.users().messages().list(**params).execute()
            ids = [message["id"] for message in response.get("messages", [])]
            return ids, response.get("nextPageToken")

        return await asyncio.to_thread(_execute_list)

    async def get_message_metadata(self, message_id: str) -> Dict[str, Any]:
        """Fetch the Subject and Date headers plus internalDate for a message."""
        credentials = await self._token_service.get_credentials()

        def _execute_get() -> Dict[str, Any]:
            service = build_service("gmail", "v1", credentials)
            return (
                service.users()
                .messages()
                .get(
                    userId="me",
                    id=message_id,
                    format="metadata",
                    metadataHeaders=["subject", "date"],
                )
                .execute()
            )

        return await asyncio.to_thread(_execute_get)

    async def get_image_attachments(self, message_id: str) -> List[Tuple[str, str, bytes]]:
        """Download image attachments as ``(filename, mime_type, data)`` tuples."""
        credentials = await self._token_service.get_credentials()

        def _execute_download() -> List[Tuple[str, str, bytes]]:
            service = build_service("gmail", "v1", credentials)
            message = (
                service.users()
                .messages()
                .get(userId="me", id=message_id, format="full")
                .execute()
            )
            parts = message.get("payload", {}).get("parts") or []
            attachments: List[Tuple[str, str, bytes]] = []
            for part in parts:
                mime_type = part.get("mimeType") or ""
                attachment_id = part.get("body", {}).get("attachmentId")
                if not part.get("filename") or not mime_type.startswith("image/"):
                    continue
                if not attachment_id:
                    continue
                body = (
                    service.users()
                    .messages()
                    .attachments()
                    .get(userId="me", messageId=message_id, id=attachment_id)
                    .execute()
                )
                encoded = body.get("data")
                if encoded:
                    attachments.append(
                        (part["filename"], mime_type, base64.urlsafe_b64decode(encoded))
                    )
            return attachments

        return await asyncio.to_thread(_execute_download)


def summarize_message(message: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a metadata response as ``{id, subject, timestamp}``."""
    headers = message.get("payload", {}).get("headers", [])
    subject = next(
        (
            header.get("value")
            for header in headers
            if (header.get("name") or "").lower() == "subject"
        ),
        None,
    )
    internal_date = message.get("internalDate")
    return {
        "id": message["id"],
        "subject": subject or "No Subject",
        "timestamp": int(internal_date) if internal_date else None,
    }


__all__ = ["GmailClient", "summarize_message"]
