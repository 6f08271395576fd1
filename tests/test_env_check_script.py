"""Tests for the configuration pre-flight script."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from dashboard.clients.credential_store import CredentialStore
from dashboard.models.credentials import CredentialRecord
from dashboard.services.token_cipher import TokenCipherService
from scripts import check_env

REQUIRED_ENV_KEYS = [
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REDIRECT_URI",
    "GEMINI_API_KEY",
]

VALID_ENV = {
    "GOOGLE_CLIENT_ID": "abc",
    "GOOGLE_CLIENT_SECRET": "secret",
    "GOOGLE_REDIRECT_URI": "https://example.com/auth/google/callback",
    "GEMINI_API_KEY": "gemini-key",
}


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


@pytest.fixture()
def env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in REQUIRED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TOKEN_ENCRYPTION_SECRET", "configured-secret")
    monkeypatch.setenv("TOKEN_PATH", str(tmp_path / "token.json"))
    path = tmp_path / ".env"
    _write_env(path, **VALID_ENV)
    return path


def _store_credential(path: Path, secret: str) -> None:
    store = CredentialStore(path, TokenCipherService(secret=secret))
    store.save(
        CredentialRecord(
            access_token="access",
            refresh_token="refresh",
            expires_at=datetime(2025, 3, 1, 13, 0, tzinfo=timezone.utc),
            scopes=("scope-a",),
        )
    )


def test_missing_env_file_is_a_runtime_error(tmp_path: Path) -> None:
    exit_code = check_env.main(["--env-file", str(tmp_path / ".missing-env")])

    assert exit_code == check_env.EXIT_RUNTIME_ERROR


def test_valid_settings_without_credential_pass(
    env_file: Path, capsys: pytest.CaptureFixture
) -> None:
    exit_code = check_env.main(["--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_OK
    output = capsys.readouterr().out
    assert "https://example.com/auth/google/callback" in output
    assert "missing, sign-in required" in output


def test_required_credential_must_exist(env_file: Path) -> None:
    exit_code = check_env.main(["--env-file", str(env_file), "--require-credentials"])

    assert exit_code == check_env.EXIT_CREDENTIAL_ERROR


def test_missing_required_value_fails_validation(
    env_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    values = dict(VALID_ENV)
    values.pop("GOOGLE_CLIENT_SECRET")
    _write_env(env_file, **values)

    exit_code = check_env.main(["--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_VALIDATION_ERROR


def test_redirect_uri_must_target_callback_route(env_file: Path) -> None:
    _write_env(
        env_file,
        **{**VALID_ENV, "GOOGLE_REDIRECT_URI": "https://example.com/oauth/callback"},
    )

    exit_code = check_env.main(["--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_REDIRECT_MISMATCH


def test_credential_encrypted_with_configured_secret_passes(
    env_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture
) -> None:
    _store_credential(tmp_path / "token.json", "configured-secret")

    exit_code = check_env.main(["--env-file", str(env_file), "--require-credentials"])

    assert exit_code == check_env.EXIT_OK
    assert "ok, with refresh token" in capsys.readouterr().out


def test_credential_from_rotated_secret_is_reported(
    env_file: Path, tmp_path: Path
) -> None:
    _store_credential(tmp_path / "token.json", "previous-secret")

    exit_code = check_env.main(["--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_CREDENTIAL_ERROR
