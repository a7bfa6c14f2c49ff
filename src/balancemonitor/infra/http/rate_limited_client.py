"""Outbound HTTP client used for every upstream of the service.

Three instances are wired: a plain one for the Ethereum node and the auth server, a token-authenticated
one for the price API, and one for the exchange mediator with its own longer timeout.
"""

import asyncio
import time

import httpx


class RateLimitedClient:
    """Spaces requests to one upstream at least 1/rate_per_second apart. Requests time out after timeout seconds.

    auth is applied to every request, e.g. the client-credentials token for the price API and mediator.
    """

    def __init__(
        self,
        rate_per_second: float = 20.0,
        timeout: float = 5.0,
        auth: httpx.Auth | None = None,
    ) -> None:
        self._min_interval = 1.0 / rate_per_second
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(timeout=timeout, auth=auth)

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        await self._wait_for_slot()
        return await self._client.get(url, params=params)

    async def post(
        self,
        url: str,
        json: dict | list | None = None,
        data: dict | None = None,
        auth: httpx.BasicAuth | None = None,
    ) -> httpx.Response:
        await self._wait_for_slot()
        if auth is None:
            return await self._client.post(url, json=json, data=data)
        return await self._client.post(url, json=json, data=data, auth=auth)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
