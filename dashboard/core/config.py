"""
Application configuration models and helpers.

Centralizes settings management so the HTTP layer, the Google clients and the
operational scripts share a consistent configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Optional

import os

from pydantic import AnyHttpUrl, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


DEFAULT_SCOPES: tuple[str, ...] = (
    "https://www.googleapis.com/auth/gmail.readonly",
    "https://www.googleapis.com/auth/gmail.modify",
    "https://www.googleapis.com/auth/calendar",
    "https://www.googleapis.com/auth/calendar.events",
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/spreadsheets",
)


class GoogleSettings(BaseSettings):
    """Client identity registered with Google for the OAuth flow."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    client_id: str = Field(..., validation_alias="GOOGLE_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="GOOGLE_CLIENT_SECRET")
    redirect_uri: AnyHttpUrl = Field(..., validation_alias="GOOGLE_REDIRECT_URI")


class OAuthSettings(BaseSettings):
    """OAuth flow configuration."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    scopes: Annotated[tuple[str, ...], NoDecode] = Field(
        DEFAULT_SCOPES,
        validation_alias="OAUTH_SCOPES",
    )

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing scopes as a comma-separated string."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(value)
        return tuple(scope.strip() for scope in value.split(",") if scope.strip())


class SecuritySettings(BaseSettings):
    """Security-related configuration."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    token_encryption_secret: Optional[str] = Field(
        None,
        validation_alias="TOKEN_ENCRYPTION_SECRET",
        description=(
            "Secret used to derive the symmetric key for encrypting stored tokens."
        ),
    )


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    api_key: str = Field(..., validation_alias="GEMINI_API_KEY")
    model_name: str = Field("gemini-1.5-pro", validation_alias="GEMINI_MODEL_NAME")
    vision_model_name: str = Field(
        "gemini-1.5-flash", validation_alias="GEMINI_VISION_MODEL_NAME"
    )


class StorageSettings(BaseSettings):
    """Where the persisted OAuth credential lives."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    token_path: Path = Field(Path("token.json"), validation_alias="TOKEN_PATH")


class ProcessingSettings(BaseSettings):
    """Limits for uploaded document processing."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    max_upload_bytes: int = Field(
        10 * 1024 * 1024, validation_alias="MAX_UPLOAD_BYTES"
    )
    worker_count: int = Field(2, validation_alias="PROCESSING_WORKERS")
    max_pending_jobs: int = Field(
        8,
        validation_alias="PROCESSING_MAX_PENDING",
        description="Jobs queued or running before new uploads are rejected.",
    )


class CacheSettings(BaseSettings):
    """Response cache configuration."""

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    ttl_seconds: float = Field(300, validation_alias="CACHE_TTL_SECONDS")


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    log_file: Optional[Path] = Field(
        None,
        validation_alias="APP_LOG_FILE",
        description="Optional file that receives a copy of the application log.",
    )
    frontend_base_url: Optional[HttpUrl] = Field(
        None,
        validation_alias="FRONTEND_BASE_URL",
        description="Optional URL for redirecting users back to the front-end.",
    )
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    oauth: OAuthSettings = Field(default_factory=OAuthSettings)
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "CacheSettings",
    "DEFAULT_SCOPES",
    "GeminiSettings",
    "GoogleSettings",
    "OAuthSettings",
    "ProcessingSettings",
    "SecuritySettings",
    "StorageSettings",
    "get_settings",
]
