"""
Paginated, cached listings of the user's mail, Docs and Sheets.

Each listing follows the same sequence: serve a cached page when present,
otherwise make sure the access token is fresh, walk to the requested page's
cursor, fetch the page, shape it, and cache the shaped result.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from dashboard.clients.gmail import summarize_message
from dashboard.clients.google_api import upstream_errors
from dashboard.clients.google_drive import (
    DOCUMENT_MIME_TYPE,
    SPREADSHEET_MIME_TYPE,
    summarize_file,
)
from dashboard.services.pagination import PageOutOfRangeError, resolve_cursor
from dashboard.services.result_cache import cache_key

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.clients.gmail import GmailClient
    from dashboard.clients.google_drive import GoogleDriveClient
    from dashboard.services.google_tokens import GoogleTokenService
    from dashboard.services.result_cache import ResultCache

logger = logging.getLogger(__name__)

Page = Tuple[List[Any], Optional[str]]

DEFAULT_PAGE_SIZE = 10


class WorkspaceListingService:
    """Serve page-numbered listings backed by cursor-paginated Google APIs."""

    def __init__(
        self,
        *,
        token_service: "GoogleTokenService",
        cache: "ResultCache",
        gmail: "GmailClient",
        drive: "GoogleDriveClient",
    ) -> None:
        self._tokens = token_service
        self._cache = cache
        self._gmail = gmail
        self._drive = drive

    async def list_emails(self, *, page: int, page_size: int) -> Dict[str, Any]:
        """Return ``{emails: [{id, subject, timestamp}], nextPageToken}``."""

        async def list_ids(cursor: Optional[str], size: int) -> Page:
            return await self._gmail.list_message_ids(page_token=cursor, page_size=size)

        async def shape(ids: List[str]) -> List[Dict[str, Any]]:
            messages = await asyncio.gather(
                *(self._gmail.get_message_metadata(message_id) for message_id in ids)
            )
            return [summarize_message(message) for message in messages]

        return await self._list_page(
            resource="emails",
            page=page,
            page_size=page_size,
            list_one_page=list_ids,
            shape=shape,
        )

    async def list_docs(self, *, page: int, page_size: int) -> Dict[str, Any]:
        """Return ``{docs: [{id, title, modifiedTime}], nextPageToken}``."""
        return await self._list_drive_files(
            resource="docs", mime_type=DOCUMENT_MIME_TYPE, page=page, page_size=page_size
        )

    async def list_sheets(self, *, page: int, page_size: int) -> Dict[str, Any]:
        """Return ``{sheets: [{id, title, modifiedTime}], nextPageToken}``."""
        return await self._list_drive_files(
            resource="sheets",
            mime_type=SPREADSHEET_MIME_TYPE,
            page=page,
            page_size=page_size,
        )

    async def _list_drive_files(
        self, *, resource: str, mime_type: str, page: int, page_size: int
    ) -> Dict[str, Any]:
        async def list_files(cursor: Optional[str], size: int) -> Page:
            return await self._drive.list_files(
                mime_type=mime_type, page_size=size, page_token=cursor
            )

        async def shape(files: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            return [summarize_file(file) for file in files]

        return await self._list_page(
            resource=resource,
            page=page,
            page_size=page_size,
            list_one_page=list_files,
            shape=shape,
        )

    async def _list_page(
        self,
        *,
        resource: str,
        page: int,
        page_size: int,
        list_one_page: Callable[[Optional[str], int], Awaitable[Page]],
        shape: Callable[[List[Any]], Awaitable[List[Dict[str, Any]]]],
    ) -> Dict[str, Any]:
        page = max(page, 1)
        if page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        key = cache_key(resource, page, page_size)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        await self._tokens.ensure_fresh()

        with upstream_errors(f"fetching {resource}"):
            try:
                cursor = await resolve_cursor(page, page_size, list_one_page)
            except PageOutOfRangeError as exc:
                logger.info("%s page %d is past the end of the listing", resource, exc.target_page)
                result: Dict[str, Any] = {resource: [], "nextPageToken": None}
            else:
                items, next_cursor = await list_one_page(cursor, page_size)
                result = {resource: await shape(list(items)), "nextPageToken": next_cursor or None}

        self._cache.set(key, result)
        return result


__all__ = ["WorkspaceListingService"]
