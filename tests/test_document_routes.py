try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import copy

import httpx
import pytest

from dashboard.main import app
from dashboard.services.document_processing import DocumentProcessingService
from dashboard.services.result_cache import ResultCache
from dashboard.services.worker_pool import WorkerPool

pytestmark = pytest.mark.anyio


class StubTokenService:
    async def is_authenticated(self) -> bool:
        return True


class FakeGemini:
    def __init__(self) -> None:
        self.images: list[tuple[bytes, str]] = []
        self.fail = False

    def extract_image_text(self, image: bytes, mime_type: str = "image/png") -> str:
        if self.fail:
            raise RuntimeError("vision model unavailable")
        self.images.append((image, mime_type))
        return f"text from {len(image)} bytes"


class FakeGmail:
    def __init__(self) -> None:
        self.attachments: dict[str, list[tuple[str, str, bytes]]] = {
            "with-images": [("receipt.png", "image/png", b"png-bytes")],
            "plain": [],
        }
        self.calls: list[str] = []

    async def get_image_attachments(self, message_id: str):
        self.calls.append(message_id)
        return self.attachments[message_id]


@pytest.fixture()
def processing_env():
    from dashboard import dependencies
    from dashboard.core.config import get_settings

    settings = copy.deepcopy(get_settings())
    settings.processing.max_upload_bytes = 64
    gemini = FakeGemini()
    gmail = FakeGmail()
    pool = WorkerPool(max_workers=1, max_pending=2)
    service = DocumentProcessingService(
        pool=pool, gemini=gemini, gmail=gmail, cache=ResultCache()
    )

    app.dependency_overrides.clear()
    app.dependency_overrides.update(
        {
            dependencies.get_google_token_service: lambda: StubTokenService(),
            dependencies.get_document_processing_service: lambda: service,
            dependencies.get_app_settings: lambda: settings,
        }
    )

    yield gemini, gmail

    app.dependency_overrides.clear()
    pool.shutdown()


@pytest.fixture()
async def client(processing_env):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    ) as test_client:
        yield test_client


async def test_image_upload_is_recognized(processing_env, client):
    gemini, _ = processing_env

    response = await client.post(
        "/api/process-document",
        files={"file": ("scan.png", b"0123456789", "image/png")},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "text from 10 bytes"}
    assert gemini.images == [(b"0123456789", "image/png")]


async def test_oversized_upload_never_reaches_extraction(processing_env, client):
    gemini, _ = processing_env

    response = await client.post(
        "/api/process-document",
        files={"file": ("big.png", b"x" * 65, "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "File too large"
    assert gemini.images == []


async def test_upload_at_the_limit_is_accepted(client):
    response = await client.post(
        "/api/process-document",
        files={"file": ("edge.png", b"x" * 64, "image/png")},
    )

    assert response.status_code == 200


async def test_unsupported_type_is_rejected(processing_env, client):
    gemini, _ = processing_env

    response = await client.post(
        "/api/process-document",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Only image and PDF files are allowed"
    assert gemini.images == []


async def test_missing_file_is_rejected(client):
    response = await client.post("/api/process-document", data={"other": "value"})

    assert response.status_code == 400
    assert response.json() == {"error": "No file provided"}


async def test_extraction_failure_maps_to_500(processing_env, client):
    gemini, _ = processing_env
    gemini.fail = True

    response = await client.post(
        "/api/process-document",
        files={"file": ("scan.png", b"abc", "image/png")},
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to process document",
        "details": "vision model unavailable",
    }


async def test_attachments_are_processed_and_cached(processing_env, client):
    _, gmail = processing_env

    first = await client.post(
        "/api/process-email-attachments", json={"messageId": "with-images"}
    )
    second = await client.post(
        "/api/process-email-attachments", json={"messageId": "with-images"}
    )

    expected = {"results": [{"filename": "receipt.png", "text": "text from 9 bytes"}]}
    assert first.json() == expected
    assert second.json() == expected
    assert gmail.calls == ["with-images"]


async def test_message_without_images_returns_null(client):
    response = await client.post("/api/process-email-attachments", json={"messageId": "plain"})

    assert response.status_code == 200
    assert response.json() == {"results": None}


async def test_attachments_require_message_id(client):
    response = await client.post("/api/process-email-attachments", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Message ID is required"}
