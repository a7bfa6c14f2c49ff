"""Ethereum JSON-RPC client."""

import logging

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from balancemonitor.exceptions import ExternalServiceError
from balancemonitor.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


class EthRpcClient:
    def __init__(self, node_url: str, http_client: RateLimitedClient) -> None:
        self._node_url = node_url
        self._http = http_client

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
        reraise=True,
    )
    async def _call(self, method: str, params: list) -> dict | list | int | str | None:
        """Execute a JSON-RPC call and return the result field."""
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        resp = await self._http.post(self._node_url, json=payload)
        data = resp.json()

        if "error" in data:
            error = data["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ExternalServiceError(f"Ethereum RPC error ({method}): {msg}")

        return data.get("result")

    async def get_balance_wei(self, address: str) -> int:
        result = await self._call("eth_getBalance", [address, "latest"])
        if not isinstance(result, str):
            raise ExternalServiceError(f"Unexpected eth_getBalance result: {result!r}")
        return int(result, 16)
