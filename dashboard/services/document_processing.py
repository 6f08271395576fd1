"""
Text extraction for uploaded documents and Gmail image attachments.

PDFs are parsed locally with PyMuPDF; images are transcribed by the Gemini
vision model. Both run on the shared worker pool so a large upload never
stalls the event loop.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import fitz  # PyMuPDF

from dashboard.clients.google_api import upstream_errors
from dashboard.core.errors import ProcessingError, WorkerPoolSaturatedError
from dashboard.services.result_cache import cache_key

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.clients.gemini import GeminiClient
    from dashboard.clients.gmail import GmailClient
    from dashboard.services.result_cache import ResultCache
    from dashboard.services.worker_pool import WorkerPool

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def is_supported_mime_type(mime_type: Optional[str]) -> bool:
    """Uploads must be an image or a PDF."""
    if not mime_type:
        return False
    return mime_type.startswith("image/") or mime_type == PDF_MIME_TYPE


def extract_pdf_text(data: bytes) -> str:
    """Concatenate the text layer of every page in a PDF."""
    with fitz.open(stream=data, filetype="pdf") as document:
        pages = [page.get_text() for page in document]
    content = "\n\n".join(text for text in pages if text.strip())
    return re.sub(r"\n{3,}", "\n\n", content).strip()


class DocumentProcessingService:
    """Turn uploaded files and email attachments into plain text."""

    def __init__(
        self,
        *,
        pool: "WorkerPool",
        gemini: "GeminiClient",
        gmail: "GmailClient",
        cache: "ResultCache",
    ) -> None:
        self._pool = pool
        self._gemini = gemini
        self._gmail = gmail
        self._cache = cache

    async def extract_text(self, data: bytes, mime_type: str) -> str:
        """Extract text from a PDF or an image; other types are rejected upstream."""
        logger.info("Processing document (%s, %d bytes)", mime_type, len(data))
        try:
            if mime_type == PDF_MIME_TYPE:
                return await self._pool.submit(extract_pdf_text, data)
            return await self._pool.submit(self._gemini.extract_image_text, data, mime_type)
        except WorkerPoolSaturatedError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Document processing error: %s", exc)
            raise ProcessingError(details=str(exc)) from exc

    async def process_email_attachments(
        self, message_id: str
    ) -> Optional[List[Dict[str, Any]]]:
        """Recognize text in a message's image attachments, or None if it has none."""
        key = cache_key("attachments", message_id)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        with upstream_errors("fetching email attachments"):
            attachments = await self._gmail.get_image_attachments(message_id)
        if not attachments:
            return None

        results = []
        for filename, mime_type, data in attachments:
            text = await self.extract_text(data, mime_type)
            results.append({"filename": filename, "text": text})

        self._cache.set(key, results)
        return results


__all__ = [
    "DocumentProcessingService",
    "PDF_MIME_TYPE",
    "extract_pdf_text",
    "is_supported_mime_type",
]
