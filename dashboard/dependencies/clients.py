"""
Factory functions to provide shared clients and services as FastAPI dependencies.

Each factory is cached so the credential state, the response cache and the
worker pool are process-wide singletons; tests swap them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from dashboard.clients import (
    CredentialStore,
    GeminiClient,
    GmailClient,
    GoogleCalendarClient,
    GoogleDocsClient,
    GoogleDriveClient,
    GoogleOAuthClient,
    GoogleSheetsClient,
)
from dashboard.core.config import get_settings
from dashboard.services import (
    ChatService,
    DocumentProcessingService,
    GoogleTokenService,
    ResultCache,
    TokenCipherService,
    WorkerPool,
    WorkspaceActionsService,
    WorkspaceListingService,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    settings = _settings()
    return GoogleOAuthClient(settings.google, settings.oauth)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for token storage."""
    return TokenCipherService.from_settings(_settings())


@lru_cache()
def get_credential_store() -> CredentialStore:
    """Provide the on-disk credential store."""
    settings = _settings()
    return CredentialStore(settings.storage.token_path, get_token_cipher_service())


@lru_cache()
def get_google_token_service() -> GoogleTokenService:
    """Provide the process-wide token lifecycle manager."""
    return GoogleTokenService(
        store=get_credential_store(),
        oauth_client=get_google_oauth_client(),
    )


@lru_cache()
def get_result_cache() -> ResultCache:
    """Provide the shared response cache."""
    return ResultCache(ttl_seconds=_settings().cache.ttl_seconds)


@lru_cache()
def get_worker_pool() -> WorkerPool:
    """Provide the bounded pool for document extraction."""
    processing = _settings().processing
    return WorkerPool(
        max_workers=processing.worker_count,
        max_pending=processing.max_pending_jobs,
    )


@lru_cache()
def get_gemini_client() -> GeminiClient:
    """Provide Gemini client instance."""
    return GeminiClient(_settings().gemini)


@lru_cache()
def get_gmail_client() -> GmailClient:
    return GmailClient(get_google_token_service())


@lru_cache()
def get_drive_client() -> GoogleDriveClient:
    return GoogleDriveClient(get_google_token_service())


@lru_cache()
def get_calendar_client() -> GoogleCalendarClient:
    return GoogleCalendarClient(get_google_token_service())


@lru_cache()
def get_docs_client() -> GoogleDocsClient:
    return GoogleDocsClient(get_google_token_service())


@lru_cache()
def get_sheets_client() -> GoogleSheetsClient:
    return GoogleSheetsClient(get_google_token_service())


def get_listing_service() -> WorkspaceListingService:
    """Build the paginated listing service over the shared cache."""
    return WorkspaceListingService(
        token_service=get_google_token_service(),
        cache=get_result_cache(),
        gmail=get_gmail_client(),
        drive=get_drive_client(),
    )


def get_workspace_actions_service() -> WorkspaceActionsService:
    """Build the Calendar/Docs/Sheets action service."""
    return WorkspaceActionsService(
        calendar=get_calendar_client(),
        docs=get_docs_client(),
        sheets=get_sheets_client(),
    )


def get_document_processing_service() -> DocumentProcessingService:
    """Build the document extraction service on the shared worker pool."""
    return DocumentProcessingService(
        pool=get_worker_pool(),
        gemini=get_gemini_client(),
        gmail=get_gmail_client(),
        cache=get_result_cache(),
    )


def get_chat_service() -> ChatService:
    """Build a single-turn chat service using Gemini."""
    return ChatService(get_gemini_client())


__all__ = [
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
