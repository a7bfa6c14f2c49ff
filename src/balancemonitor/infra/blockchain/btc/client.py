"""Bitcoin balances from the blockchain.info query API."""

import logging
from decimal import Decimal, InvalidOperation

from balancemonitor.infra.blockchain.base import BlockchainBalanceClient
from balancemonitor.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

SATOSHI_PER_BTC = Decimal(10) ** 8


class BtcBalanceClient(BlockchainBalanceClient):
    def __init__(self, http_client: RateLimitedClient, api_url: str = "https://blockchain.info") -> None:
        self._http = http_client
        self._api_url = api_url.rstrip("/")

    async def get_balance(self, wallet_address: str) -> Decimal | None:
        try:
            resp = await self._http.get(f"{self._api_url}/q/addressbalance/{wallet_address}")
        except Exception:
            logger.exception("Could not get BTC balance of %s", wallet_address)
            return None

        if resp.status_code != 200:
            logger.error("blockchain.info returned %d for %s", resp.status_code, wallet_address)
            return None

        try:
            satoshi = Decimal(resp.text.strip())
        except InvalidOperation:
            logger.error("Unexpected blockchain.info balance for %s: %r", wallet_address, resp.text)
            return None
        return satoshi / SATOSHI_PER_BTC
