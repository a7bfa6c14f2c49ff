"""httpx auth flow that attaches an OAuth2 client-credentials access token to outbound requests."""

import asyncio
import logging
import time
from typing import AsyncGenerator

import httpx

from balancemonitor.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

# Renew slightly before the server-side expiry.
EXPIRY_MARGIN_SECONDS = 30


class ClientCredentialsAuth(httpx.Auth):
    def __init__(
        self,
        oauth2_api_url: str,
        client_id: str,
        client_secret: str,
        timeout: float = 5.0,
    ) -> None:
        self._token_url = f"{oauth2_api_url.rstrip('/')}/oauth/token"
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._access_token: str | None = None
        self._expires_at = 0.0
        self._lock = asyncio.Lock()

    def sync_auth_flow(self, request: httpx.Request):
        raise RuntimeError("ClientCredentialsAuth supports only httpx.AsyncClient")

    async def async_auth_flow(self, request: httpx.Request) -> AsyncGenerator[httpx.Request, httpx.Response]:
        request.headers["Authorization"] = f"Bearer {await self._get_token()}"
        response = yield request

        if response.status_code == 401:
            # Token revoked or expired early; fetch a new one and retry once.
            logger.info("Outbound request to %s got 401, renewing access token", request.url.host)
            request.headers["Authorization"] = f"Bearer {await self._get_token(force=True)}"
            yield request

    async def _get_token(self, force: bool = False) -> str:
        async with self._lock:
            if force or self._access_token is None or time.monotonic() >= self._expires_at:
                token, expires_in = await self._fetch_token()
                self._access_token = token
                self._expires_at = time.monotonic() + max(expires_in - EXPIRY_MARGIN_SECONDS, 0)
            return self._access_token

    async def _fetch_token(self) -> tuple[str, int]:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.post(
                self._token_url,
                data={"grant_type": "client_credentials"},
                auth=(self._client_id, self._client_secret),
            )
        if resp.status_code != 200:
            raise ExternalServiceError(f"Could not obtain access token: HTTP {resp.status_code}")
        data = resp.json()
        return data["access_token"], int(data.get("expires_in", 0))
