"""Service layer exports."""

from .chat import ChatService
from .document_processing import DocumentProcessingService
from .google_tokens import GoogleTokenService
from .pagination import PageOutOfRangeError, resolve_cursor
from .resource_listing import WorkspaceListingService
from .result_cache import ResultCache
from .token_cipher import TokenCipherService
from .worker_pool import WorkerPool
from .workspace_actions import WorkspaceActionsService

__all__ = [
    "ChatService",
    "DocumentProcessingService",
    "GoogleTokenService",
    "PageOutOfRangeError",
    "ResultCache",
    "TokenCipherService",
    "WorkerPool",
    "WorkspaceActionsService",
    "WorkspaceListingService",
    "resolve_cursor",
]
