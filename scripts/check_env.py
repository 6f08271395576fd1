"""Pre-flight check for the dashboard's configuration.

Run it before starting the server, or after editing ``.env``::

    python -m scripts.check_env --env-file /srv/dashboard/.env
    python -m scripts.check_env --require-credentials

It loads ``AppSettings`` from the env file, confirms Google will redirect back
to this server's OAuth callback route, and, when a credential file exists,
confirms it decrypts with the configured token secret. A secret rotated
without clearing ``token.json`` otherwise only shows up as a silent sign-out.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from dashboard.clients.credential_store import CredentialStore
from dashboard.core.config import AppSettings, _load_env_file
from dashboard.services.token_cipher import TokenCipherService

CALLBACK_PATH = "/auth/google/callback"

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_REDIRECT_MISMATCH = 3
EXIT_CREDENTIAL_ERROR = 4
EXIT_RUNTIME_ERROR = 5


def _load_settings(env_file: Path) -> AppSettings:
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _check_redirect_uri(settings: AppSettings) -> bool:
    path = (settings.google.redirect_uri.path or "").rstrip("/")
    if path == CALLBACK_PATH:
        print(f"Redirect URI:     {settings.google.redirect_uri}")
        return True
    print(
        f"GOOGLE_REDIRECT_URI must point at {CALLBACK_PATH} on this server; "
        f"got {settings.google.redirect_uri}.",
        file=sys.stderr,
    )
    return False


def _check_credentials(settings: AppSettings, *, required: bool) -> bool:
    """True when the credential file is absent (and optional) or decrypts."""
    token_path = settings.storage.token_path
    if not token_path.exists():
        print(f"Credential file:  {token_path} [missing, sign-in required]")
        if required:
            print("A stored credential is required but none was found.", file=sys.stderr)
        return not required

    store = CredentialStore(token_path, TokenCipherService.from_settings(settings))
    record = store.load()
    if record is None:
        print(
            f"Credential file {token_path} cannot be read with the configured "
            "TOKEN_ENCRYPTION_SECRET. Delete it and sign in again, or restore the "
            "previous secret.",
            file=sys.stderr,
        )
        return False

    expiry = record.expires_at.isoformat() if record.expires_at else "no expiry"
    refresh = "with" if record.refresh_token else "without"
    print(f"Credential file:  {token_path} [ok, {refresh} refresh token, expires {expiry}]")
    return True


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate dashboard settings and the stored Google credential."
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the repo root).",
    )
    parser.add_argument(
        "--require-credentials",
        action="store_true",
        help="Fail when no stored credential exists yet.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    if not _check_redirect_uri(settings):
        return EXIT_REDIRECT_MISMATCH
    print(f"OAuth scopes:     {len(settings.oauth.scopes)} requested")
    print(f"Upload limit:     {settings.processing.max_upload_bytes} bytes")
    if not _check_credentials(settings, required=args.require_credentials):
        return EXIT_CREDENTIAL_ERROR
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
