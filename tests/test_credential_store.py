try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json
from datetime import datetime, timezone
from pathlib import Path

from dashboard.clients.credential_store import CredentialStore
from dashboard.models.credentials import CredentialRecord
from dashboard.services.token_cipher import TokenCipherService


def _store(path: Path, secret: str = "store-secret") -> CredentialStore:
    return CredentialStore(path, TokenCipherService(secret=secret))


def test_round_trip_preserves_every_field(tmp_path: Path) -> None:
    store = _store(tmp_path / "token.json")
    record = CredentialRecord(
        access_token="access",
        refresh_token="refresh",
        expires_at=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        scopes=("https://www.googleapis.com/auth/calendar", "openid"),
    )

    store.save(record)

    assert store.load() == record


def test_round_trip_without_refresh_token_or_expiry(tmp_path: Path) -> None:
    store = _store(tmp_path / "token.json")
    record = CredentialRecord(access_token="access")

    store.save(record)
    loaded = store.load()

    assert loaded == record
    assert loaded.is_expired(datetime.now(timezone.utc)) is False


def test_tokens_are_encrypted_at_rest(tmp_path: Path) -> None:
    path = tmp_path / "token.json"
    _store(path).save(CredentialRecord(access_token="access", refresh_token="refresh"))

    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    assert "access" not in data.values()
    assert "refresh" not in data.values()
    assert data["access_token_encrypted"]


def test_missing_file_loads_as_none(tmp_path: Path) -> None:
    assert _store(tmp_path / "absent.json").load() is None


def test_unreadable_file_loads_as_none(tmp_path: Path) -> None:
    path = tmp_path / "token.json"
    _store(path, secret="one").save(CredentialRecord(access_token="access"))

    assert _store(path, secret="two").load() is None

    path.write_text("{not json", encoding="utf-8")
    assert _store(path).load() is None


def test_clear_removes_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "token.json"
    store = _store(path)
    store.save(CredentialRecord(access_token="access"))
    assert path.exists()

    store.clear()

    assert not path.exists()
    store.clear()
