"""
Pydantic models for dashboard request bodies.

Fields are optional at the schema level so missing values reach the route
and produce the endpoint-specific 400 message rather than a generic one.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CalendarEventRequest(BaseModel):
    """Body for creating a calendar event."""

    summary: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[str] = Field(None, alias="startTime")
    end_time: Optional[str] = Field(None, alias="endTime")


class DocumentUpdateRequest(BaseModel):
    """Lines to insert at the start of a document."""

    content: Any = None


class SpreadsheetUpdateRequest(BaseModel):
    """A single row appended to ``range``."""

    range: Optional[str] = None
    values: Optional[List[Any]] = None


class EmailAttachmentsRequest(BaseModel):
    message_id: Optional[str] = Field(None, alias="messageId")


class ChatRequest(BaseModel):
    message: str = Field(..., description="User message forwarded to the model.")


class ChatResponse(BaseModel):
    reply: str


class AuthStatusResponse(BaseModel):
    authenticated: bool


__all__ = [
    "AuthStatusResponse",
    "CalendarEventRequest",
    "ChatRequest",
    "ChatResponse",
    "DocumentUpdateRequest",
    "EmailAttachmentsRequest",
    "SpreadsheetUpdateRequest",
]
