"""Shared helpers for the googleapiclient-based wrappers."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from dashboard.core.errors import UpstreamError

logger = logging.getLogger(__name__)


def build_service(name: str, version: str, credentials: Credentials) -> Any:
    """Build a discovery client without the on-disk discovery cache."""
    return build(name, version, credentials=credentials, cache_discovery=False)


def describe_http_error(exc: HttpError) -> str:
    """Extract Google's error message from an HttpError body when present."""
    try:
        payload = json.loads(exc.content.decode("utf-8"))
        message = payload.get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or exc.reason or str(exc)


@contextmanager
def upstream_errors(action: str) -> Iterator[None]:
    """Re-raise Google API and transport failures as ``UpstreamError``."""
    try:
        yield
    except HttpError as exc:
        message = describe_http_error(exc)
        logger.error("Error %s: %s", action, message)
        raise UpstreamError(details=message) from exc
    except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as exc:
        logger.error("Error %s: %s", action, exc)
        raise UpstreamError(details=str(exc)) from exc


__all__ = ["build_service", "describe_http_error", "upstream_errors"]
