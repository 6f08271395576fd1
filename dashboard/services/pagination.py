"""
Page-number pagination on top of Google's cursor-only list endpoints.

Google list calls return an opaque ``nextPageToken`` instead of accepting an
offset, so reaching page N means walking N-1 pages from the start.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

PageResult = Tuple[Sequence[Any], Optional[str]]
ListOnePage = Callable[[Optional[str], int], Awaitable[PageResult]]


class PageOutOfRangeError(Exception):
    """The listing ran out of pages before reaching the requested one."""

    def __init__(self, target_page: int, last_page: int) -> None:
        super().__init__(f"Page {target_page} does not exist; last page is {last_page}.")
        self.target_page = target_page
        self.last_page = last_page


async def resolve_cursor(
    target_page: int,
    page_size: int,
    list_one_page: ListOnePage,
) -> Optional[str]:
    """
    Return the cursor that starts ``target_page`` (1-based).

    ``None`` means "start of the listing" and is returned for the first page
    without calling ``list_one_page``. Otherwise ``list_one_page(cursor,
    page_size)`` is called ``target_page - 1`` times, each call consuming the
    previous call's next cursor. Raises ``PageOutOfRangeError`` if a call
    returns no next cursor before the walk completes.
    """
    if target_page <= 1:
        return None

    cursor: Optional[str] = None
    for current_page in range(1, target_page):
        _, next_cursor = await list_one_page(cursor, page_size)
        if not next_cursor:
            logger.info(
                "No page %d at page size %d; listing ends at page %d",
                target_page,
                page_size,
                current_page,
            )
            raise PageOutOfRangeError(target_page, current_page)
        cursor = next_cursor
    return cursor


__all__ = ["ListOnePage", "PageOutOfRangeError", "PageResult", "resolve_cursor"]
