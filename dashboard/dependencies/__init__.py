"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_calendar_client,
    get_chat_service,
    get_credential_store,
    get_docs_client,
    get_document_processing_service,
    get_drive_client,
    get_gemini_client,
    get_gmail_client,
    get_google_oauth_client,
    get_google_token_service,
    get_listing_service,
    get_result_cache,
    get_sheets_client,
    get_token_cipher_service,
    get_worker_pool,
    get_workspace_actions_service,
)
from .config import get_app_settings

__all__ = [
    "get_app_settings",
    "get_calendar_client",
    "get_chat_service",
    "get_credential_store",
    "get_docs_client",
    "get_document_processing_service",
    "get_drive_client",
    "get_gemini_client",
    "get_gmail_client",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_listing_service",
    "get_result_cache",
    "get_sheets_client",
    "get_token_cipher_service",
    "get_worker_pool",
    "get_workspace_actions_service",
]
