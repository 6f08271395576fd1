"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries the status code and the JSON ``error`` string the API
responds with; ``details`` holds the human-readable cause when one exists.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional


class DashboardError(Exception):
    """Base class for failures that map onto a JSON error response."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(self, error: Optional[str] = None, *, details: Optional[str] = None) -> None:
        if error is not None:
            self.error = error
        self.details = details
        super().__init__(self.error if details is None else f"{self.error}: {details}")

    def to_payload(self) -> dict:
        payload = {"error": self.error}
        if self.details:
            payload["details"] = self.details
        return payload


class AuthRequiredError(DashboardError):
    """No usable credential is available for a protected route."""

    status_code = HTTPStatus.UNAUTHORIZED
    error = "Authentication required"


class AuthExchangeError(DashboardError):
    """The authorization code was missing or rejected by Google."""

    status_code = HTTPStatus.BAD_REQUEST
    error = "Failed to exchange authorization code"


class RefreshError(DashboardError):
    """The stored refresh token could not produce a new access token."""

    status_code = HTTPStatus.UNAUTHORIZED
    error = "Re-authentication required"


class ValidationError(DashboardError):
    """Malformed request body or parameters."""

    status_code = HTTPStatus.BAD_REQUEST
    error = "Invalid request"


class UpstreamError(DashboardError):
    """A Google API call failed; the upstream message is passed through."""

    error = "Internal server error"


class ProcessingError(DashboardError):
    """Text extraction from an uploaded file or attachment failed."""

    error = "Failed to process document"


class WorkerPoolSaturatedError(DashboardError):
    """The document worker pool has no free capacity."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    error = "Document processor is busy"


__all__ = [
    "AuthExchangeError",
    "AuthRequiredError",
    "DashboardError",
    "ProcessingError",
    "RefreshError",
    "UpstreamError",
    "ValidationError",
    "WorkerPoolSaturatedError",
]
