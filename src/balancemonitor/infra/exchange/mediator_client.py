"""Client for the exchange mediator, which knows the user's exchange API keys and reports their balances."""

import logging

from pydantic import TypeAdapter

from balancemonitor.domain.models.exchange import ExchangeAccountBalances
from balancemonitor.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

_balances_adapter = TypeAdapter(list[ExchangeAccountBalances])


class ExchangeMediatorClient:
    def __init__(self, exchange_mediator_api_url: str, http_client: RateLimitedClient) -> None:
        self._api_url = exchange_mediator_api_url.rstrip("/")
        self._http = http_client

    async def get_user_balances(self, user_account_id: str) -> list[ExchangeAccountBalances]:
        """Balances of every exchange account of the user. Empty when the mediator cannot be reached."""
        try:
            resp = await self._http.get(f"{self._api_url}/wallet/currency-balances/user/{user_account_id}")
            if resp.status_code != 200:
                logger.error(
                    "Could not get exchange user balances for user_account_id=%s. Status code=%d, body=%s",
                    user_account_id,
                    resp.status_code,
                    resp.text,
                )
                return []
            return _balances_adapter.validate_python(resp.json())
        except Exception:
            logger.exception("Could not get exchange user balances for user_account_id=%s", user_account_id)
            return []
