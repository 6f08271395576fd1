from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from dashboard.clients.google_auth import GoogleOAuthClient, OAuthTokenExchangeError
from dashboard.core.config import DEFAULT_SCOPES, GoogleSettings, OAuthSettings


def _settings() -> tuple[GoogleSettings, OAuthSettings]:
    google = GoogleSettings(
        GOOGLE_CLIENT_ID="client",
        GOOGLE_CLIENT_SECRET="secret",
        GOOGLE_REDIRECT_URI="https://example.com/auth/google/callback",
    )
    return google, OAuthSettings()


def _client(handler) -> GoogleOAuthClient:
    google, oauth = _settings()
    return GoogleOAuthClient(google, oauth, transport=httpx.MockTransport(handler))


def test_authorization_url_embeds_scopes_and_offline_access() -> None:
    google, oauth = _settings()
    url = GoogleOAuthClient(google, oauth).build_authorization_url()

    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    assert url.startswith(GoogleOAuthClient.AUTH_BASE_URL)
    assert params["access_type"] == ["offline"]
    assert params["prompt"] == ["consent"]
    assert params["client_id"] == ["client"]
    assert params["scope"][0].split(" ") == list(DEFAULT_SCOPES)


def test_scopes_accept_comma_separated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OAUTH_SCOPES", "openid, email ,")

    assert OAuthSettings().scopes == ("openid", "email")


@pytest.mark.asyncio
async def test_exchange_posts_authorization_code_grant() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(parse_qs(request.content.decode()))
        return httpx.Response(
            200,
            json={
                "access_token": "access",
                "refresh_token": "refresh",
                "expires_in": 3599,
                "scope": "openid email",
            },
        )

    grant = await _client(handler).exchange_authorization_code("the-code")

    assert seen[0]["grant_type"] == ["authorization_code"]
    assert seen[0]["code"] == ["the-code"]
    assert grant.access_token == "access"
    assert grant.refresh_token == "refresh"
    assert grant.expires_in == 3599
    assert grant.scope == "openid email"


@pytest.mark.asyncio
async def test_refresh_allows_missing_refresh_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert parse_qs(request.content.decode())["grant_type"] == ["refresh_token"]
        return httpx.Response(200, json={"access_token": "new", "expires_in": 3600})

    grant = await _client(handler).refresh_token("refresh")

    assert grant.access_token == "new"
    assert grant.refresh_token is None


@pytest.mark.asyncio
async def test_error_status_raises_exchange_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant"})

    with pytest.raises(OAuthTokenExchangeError) as excinfo:
        await _client(handler).exchange_authorization_code("used-code")
    assert "invalid_grant" in str(excinfo.value)


@pytest.mark.asyncio
async def test_payload_without_access_token_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"expires_in": 3600})

    with pytest.raises(OAuthTokenExchangeError):
        await _client(handler).refresh_token("refresh")


@pytest.mark.asyncio
async def test_transport_failure_raises_exchange_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(OAuthTokenExchangeError):
        await _client(handler).refresh_token("refresh")
