"""Public schema exports."""

from .workspace import (
    AuthStatusResponse,
    CalendarEventRequest,
    ChatRequest,
    ChatResponse,
    DocumentUpdateRequest,
    EmailAttachmentsRequest,
    SpreadsheetUpdateRequest,
)

__all__ = [
    "AuthStatusResponse",
    "CalendarEventRequest",
    "ChatRequest",
    "ChatResponse",
    "DocumentUpdateRequest",
    "EmailAttachmentsRequest",
    "SpreadsheetUpdateRequest",
]
