"""Expose constructed client wrappers."""

from .credential_store import CredentialStore
from .gemini import GeminiClient
from .gmail import GmailClient
from .google_auth import GoogleOAuthClient
from .google_calendar import GoogleCalendarClient
from .google_docs import GoogleDocsClient
from .google_drive import GoogleDriveClient
from .google_sheets import GoogleSheetsClient

__all__ = [
    "CredentialStore",
    "GeminiClient",
    "GmailClient",
    "GoogleCalendarClient",
    "GoogleDocsClient",
    "GoogleDriveClient",
    "GoogleOAuthClient",
    "GoogleSheetsClient",
]
