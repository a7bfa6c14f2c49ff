"""Tests for the token checker and the client-credentials auth flow."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from balancemonitor.infra.oauth.client_credentials import ClientCredentialsAuth
from balancemonitor.infra.oauth.token_checker import AccessTokenChecker


def _mock_response(status_code: int, data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


class TestAccessTokenChecker:
    async def test_valid_token_resolves_user(self):
        mock_http = AsyncMock()
        mock_http.post.return_value = _mock_response(
            200,
            {
                "user_name": "alice@example.com",
                "userAccount": {"userAccountId": "user-1"},
                "authorities": ["ROLE_USER"],
                "active": True,
            },
        )
        checker = AccessTokenChecker("http://auth.test/", "balance-monitor", "secret", mock_http)

        user = await checker.check_token("abc")

        assert user.user_account_id == "user-1"
        assert user.user_name == "alice@example.com"
        assert user.authorities == {"ROLE_USER"}
        args, kwargs = mock_http.post.call_args
        assert args[0] == "http://auth.test/oauth/check_token"
        assert kwargs["data"] == {"token": "abc"}
        assert isinstance(kwargs["auth"], httpx.BasicAuth)

    async def test_rejected_token_returns_none(self):
        mock_http = AsyncMock()
        mock_http.post.return_value = _mock_response(400, {"error": "invalid_token"})
        checker = AccessTokenChecker("http://auth.test", "balance-monitor", "secret", mock_http)

        assert await checker.check_token("expired") is None


class TestClientCredentialsAuth:
    @pytest.fixture()
    def auth(self):
        auth = ClientCredentialsAuth("http://auth.test", "balance-monitor", "secret")
        auth._fetch_token = AsyncMock(side_effect=[("token-1", 3600), ("token-2", 3600)])
        return auth

    async def test_attaches_bearer_token_and_reuses_it(self, auth):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["Authorization"])
            return httpx.Response(200, json={})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler), auth=auth) as client:
            await client.get("http://prices.test/prices/USD")
            await client.get("http://prices.test/prices/USD")

        assert seen == ["Bearer token-1", "Bearer token-1"]
        assert auth._fetch_token.await_count == 1

    async def test_renews_token_once_on_unauthorized(self, auth):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers["Authorization"])
            if request.headers["Authorization"] == "Bearer token-1":
                return httpx.Response(401)
            return httpx.Response(200, json={})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler), auth=auth) as client:
            resp = await client.get("http://prices.test/prices/USD")

        assert resp.status_code == 200
        assert seen == ["Bearer token-1", "Bearer token-2"]

    async def test_expired_token_is_renewed(self, auth):
        auth._fetch_token = AsyncMock(side_effect=[("token-1", 10), ("token-2", 3600)])

        assert await auth._get_token() == "token-1"
        # 10s lifetime minus the renewal margin leaves nothing to reuse
        assert await auth._get_token() == "token-2"
