from __future__ import annotations

import fitz
import pytest

from dashboard.clients.gmail import summarize_message
from dashboard.clients.google_drive import summarize_file
from dashboard.core.errors import ProcessingError, WorkerPoolSaturatedError
from dashboard.services.document_processing import (
    DocumentProcessingService,
    extract_pdf_text,
    is_supported_mime_type,
)
from dashboard.services.result_cache import ResultCache


def _pdf_bytes(*pages: str) -> bytes:
    document = fitz.open()
    for text in pages:
        page = document.new_page()
        page.insert_text((72, 72), text)
    data = document.tobytes()
    document.close()
    return data


class InlinePool:
    """Runs submitted jobs synchronously on the caller."""

    def __init__(self, *, saturated: bool = False) -> None:
        self.saturated = saturated
        self.jobs = 0

    async def submit(self, func, *args, **kwargs):
        if self.saturated:
            raise WorkerPoolSaturatedError()
        self.jobs += 1
        return func(*args, **kwargs)


class FailingGemini:
    def extract_image_text(self, image: bytes, mime_type: str = "image/png") -> str:
        raise RuntimeError("quota exceeded")


@pytest.mark.parametrize(
    ("mime_type", "supported"),
    [
        ("image/png", True),
        ("image/jpeg", True),
        ("application/pdf", True),
        ("text/plain", False),
        ("application/vnd.google-apps.document", False),
        (None, False),
    ],
)
def test_supported_mime_types(mime_type, supported) -> None:
    assert is_supported_mime_type(mime_type) is supported


def test_extract_pdf_text_joins_pages() -> None:
    text = extract_pdf_text(_pdf_bytes("Invoice 42", "Total due"))

    assert "Invoice 42" in text
    assert "Total due" in text
    assert text.index("Invoice 42") < text.index("Total due")


@pytest.mark.asyncio
async def test_pdf_upload_runs_on_pool_without_vision_model() -> None:
    pool = InlinePool()
    service = DocumentProcessingService(
        pool=pool, gemini=FailingGemini(), gmail=None, cache=ResultCache()
    )

    text = await service.extract_text(_pdf_bytes("Quarterly report"), "application/pdf")

    assert "Quarterly report" in text
    assert pool.jobs == 1


@pytest.mark.asyncio
async def test_recognition_failure_becomes_processing_error() -> None:
    service = DocumentProcessingService(
        pool=InlinePool(), gemini=FailingGemini(), gmail=None, cache=ResultCache()
    )

    with pytest.raises(ProcessingError) as excinfo:
        await service.extract_text(b"png", "image/png")

    assert excinfo.value.to_payload() == {
        "error": "Failed to process document",
        "details": "quota exceeded",
    }


@pytest.mark.asyncio
async def test_saturated_pool_is_not_reported_as_processing_failure() -> None:
    service = DocumentProcessingService(
        pool=InlinePool(saturated=True),
        gemini=FailingGemini(),
        gmail=None,
        cache=ResultCache(),
    )

    with pytest.raises(WorkerPoolSaturatedError) as excinfo:
        await service.extract_text(b"png", "image/png")

    assert excinfo.value.status_code == 503


def test_summarize_message_defaults_subject() -> None:
    summary = summarize_message(
        {
            "id": "m1",
            "internalDate": "1741000000000",
            "payload": {"headers": [{"name": "SUBJECT", "value": ""}]},
        }
    )

    assert summary == {"id": "m1", "subject": "No Subject", "timestamp": 1741000000000}


def test_summarize_file_renames_name_to_title() -> None:
    summary = summarize_file(
        {"id": "f1", "name": "Budget", "modifiedTime": "2025-03-01T10:00:00Z", "size": "1"}
    )

    assert summary == {"id": "f1", "title": "Budget", "modifiedTime": "2025-03-01T10:00:00Z"}
