"""
FastAPI routes for the workspace dashboard.

``auth_router`` serves the Google sign-in flow at ``/auth``; ``router`` serves
the JSON API mounted under ``/api``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, File, Query, Request, UploadFile
from fastapi.responses import RedirectResponse

from dashboard.clients.gemini import GeminiModelError
from dashboard.core.errors import (
    AuthExchangeError,
    AuthRequiredError,
    DashboardError,
    ValidationError,
)
from dashboard.dependencies import (
    get_app_settings,
    get_chat_service,
    get_document_processing_service,
    get_google_token_service,
    get_listing_service,
    get_workspace_actions_service,
)
from dashboard.schemas import (
    AuthStatusResponse,
    CalendarEventRequest,
    ChatRequest,
    ChatResponse,
    DocumentUpdateRequest,
    EmailAttachmentsRequest,
    SpreadsheetUpdateRequest,
)
from dashboard.services.document_processing import is_supported_mime_type

auth_router = APIRouter()
router = APIRouter()
logger = logging.getLogger(__name__)

PageQuery = Annotated[
    int, Query(description="1-based page number; values below 1 mean the first page.")
]
PageSizeQuery = Annotated[
    int, Query(alias="pageSize", description="Items per page; values below 1 use the default.")
]


async def require_auth(
    request: Request,
    token_service: Annotated[Any, Depends(get_google_token_service)],
) -> None:
    """Reject the request with 401 unless a usable credential exists."""
    if not await token_service.is_authenticated():
        logger.warning("Unauthenticated request to protected route: %s", request.url.path)
        raise AuthRequiredError()


AuthGate = Depends(require_auth)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


@auth_router.get("/google")
async def start_google_oauth_flow(
    token_service: Annotated[Any, Depends(get_google_token_service)],
) -> RedirectResponse:
    """Send the browser to Google's consent screen."""
    authorization_url = token_service.authorization_url()
    logger.info("Starting Google auth flow")
    return RedirectResponse(url=authorization_url, status_code=HTTPStatus.FOUND)


@auth_router.get("/google/callback")
async def handle_google_oauth_callback(
    token_service: Annotated[Any, Depends(get_google_token_service)],
    settings: Annotated[Any, Depends(get_app_settings)],
    code: Optional[str] = Query(default=None, description="Authorization code."),
    error: Optional[str] = Query(default=None, description="Error reported by Google."),
) -> RedirectResponse:
    """Complete the OAuth exchange, persist tokens, and return to the dashboard."""
    if error:
        logger.error("Auth callback received error: %s", error)
        raise AuthExchangeError(f"Authentication error: {error}")

    logger.info("Received auth callback")
    await token_service.complete_authorization(code)
    logger.info("Successfully obtained tokens")

    redirect_target = settings.frontend_base_url or "/"
    return RedirectResponse(url=str(redirect_target), status_code=HTTPStatus.FOUND)


@auth_router.get("/status", response_model=AuthStatusResponse)
async def auth_status(
    token_service: Annotated[Any, Depends(get_google_token_service)],
) -> AuthStatusResponse:
    authenticated = await token_service.is_authenticated()
    logger.info("Auth status check: authenticated=%s", authenticated)
    return AuthStatusResponse(authenticated=authenticated)


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/emails", dependencies=[AuthGate])
async def list_emails(
    listing: Annotated[Any, Depends(get_listing_service)],
    page: PageQuery = 1,
    page_size: PageSizeQuery = 10,
) -> dict:
    return await listing.list_emails(page=page, page_size=page_size)


@router.post("/process-email-attachments", dependencies=[AuthGate])
async def process_email_attachments(
    payload: EmailAttachmentsRequest,
    processor: Annotated[Any, Depends(get_document_processing_service)],
) -> dict:
    """Run text recognition over a message's image attachments."""
    if not payload.message_id:
        raise ValidationError("Message ID is required")

    results = await processor.process_email_attachments(payload.message_id)
    return {"results": results}


@router.post("/process-document", dependencies=[AuthGate])
async def process_document(
    processor: Annotated[Any, Depends(get_document_processing_service)],
    settings: Annotated[Any, Depends(get_app_settings)],
    file: Optional[UploadFile] = File(default=None),
) -> dict:
    """Extract text from an uploaded image or PDF."""
    if file is None:
        raise ValidationError("No file provided")
    if not is_supported_mime_type(file.content_type):
        raise ValidationError(
            "Only image and PDF files are allowed",
            details=f"Received content type {file.content_type!r}.",
        )

    limit = settings.processing.max_upload_bytes
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise ValidationError(
            "File too large", details=f"Maximum upload size is {limit} bytes."
        )

    text = await processor.extract_text(data, file.content_type)
    return {"text": text}


@router.get("/calendar", dependencies=[AuthGate])
async def list_calendar_events(
    actions: Annotated[Any, Depends(get_workspace_actions_service)],
) -> list:
    return await actions.upcoming_events()


@router.post("/calendar", dependencies=[AuthGate])
async def create_calendar_event(
    payload: CalendarEventRequest,
    actions: Annotated[Any, Depends(get_workspace_actions_service)],
) -> dict:
    if not payload.summary or not payload.start_time or not payload.end_time:
        raise ValidationError("Missing required fields: summary, startTime, endTime")

    return await actions.create_event(
        summary=payload.summary,
        description=payload.description,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )


@router.get("/docs", dependencies=[AuthGate])
async def list_docs(
    listing: Annotated[Any, Depends(get_listing_service)],
    page: PageQuery = 1,
    page_size: PageSizeQuery = 10,
) -> dict:
    return await listing.list_docs(page=page, page_size=page_size)


@router.post("/docs/{doc_id}", dependencies=[AuthGate])
async def update_document(
    doc_id: str,
    payload: DocumentUpdateRequest,
    actions: Annotated[Any, Depends(get_workspace_actions_service)],
) -> dict:
    content = payload.content
    if not isinstance(content, list) or not all(isinstance(item, str) for item in content):
        raise ValidationError("Content must be an array of strings")

    await actions.append_to_document(doc_id, content)
    return {"success": True}


@router.get("/sheets", dependencies=[AuthGate])
async def list_sheets(
    listing: Annotated[Any, Depends(get_listing_service)],
    page: PageQuery = 1,
    page_size: PageSizeQuery = 10,
) -> dict:
    return await listing.list_sheets(page=page, page_size=page_size)


@router.post("/sheets/{spreadsheet_id}", dependencies=[AuthGate])
async def update_spreadsheet(
    spreadsheet_id: str,
    payload: SpreadsheetUpdateRequest,
    actions: Annotated[Any, Depends(get_workspace_actions_service)],
) -> dict:
    if not payload.range or not payload.values:
        raise ValidationError("Missing required fields: range, values")

    await actions.append_to_spreadsheet(spreadsheet_id, payload.range, payload.values)
    return {"success": True}


@router.post("/query", response_model=ChatResponse)
async def chat_query(
    payload: ChatRequest,
    chat: Annotated[Any, Depends(get_chat_service)],
) -> ChatResponse:
    """Single-turn chat; each request is answered independently."""
    try:
        reply = await chat.reply(payload.message)
    except GeminiModelError as exc:
        logger.error("Chat completion failed: %s", exc)
        raise DashboardError(details=str(exc)) from exc
    return ChatResponse(reply=reply)


@router.post("/metrics")
async def record_metrics(payload: Any = Body(default=None)) -> dict:
    """Accept client-side performance telemetry and log it."""
    logger.info("Performance metrics: %s", payload)
    return {"received": True}


__all__ = ["auth_router", "require_auth", "router"]
