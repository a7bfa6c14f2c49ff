"""Price API client: fetches the current rate of a currency pair."""

import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Callable

from pydantic import BaseModel, ValidationError

from balancemonitor.domain.models.price import CurrencyPrice
from balancemonitor.exceptions import PriceResponseError
from balancemonitor.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


def current_time_millis() -> int:
    return int(time.time() * 1000)


class _CurrencyPriceDto(BaseModel):
    price: str | float
    baseCurrency: str
    counterCurrency: str


class RestPriceSource:
    def __init__(
        self,
        price_api_url: str,
        http_client: RateLimitedClient,
        now_millis: Callable[[], int] = current_time_millis,
    ) -> None:
        self._price_api_url = price_api_url.rstrip("/")
        self._http = http_client
        self._now_millis = now_millis

    async def get_price(self, base_currency: str, counter_currency: str) -> CurrencyPrice:
        """Fetch base/counter from the price API.

        Raises PriceResponseError with reason_tag "request-error" on a non-2xx response,
        "missing-price" when the body does not hold exactly one price and
        "response-parse-error" when the body cannot be read at all.
        """
        if base_currency == counter_currency:
            return CurrencyPrice(
                price=Decimal(1),
                base_currency=base_currency,
                counter_currency=counter_currency,
                as_of_millis=self._now_millis(),
            )

        pair = f"{base_currency}/{counter_currency}"
        logger.debug("[%s] Fetching price", pair)
        resp = await self._http.get(
            f"{self._price_api_url}/prices/{counter_currency}",
            params={"currencyCodes": base_currency},
        )
        if not 200 <= resp.status_code < 300:
            raise PriceResponseError(
                f"[{pair}] Could not get price, response error code={resp.status_code}",
                reason_tag="request-error",
            )

        try:
            body = resp.json()
            prices = [_CurrencyPriceDto.model_validate(item) for item in body] if isinstance(body, list) else None
        except (ValueError, ValidationError) as e:
            raise PriceResponseError(
                f"[{pair}] Could not parse response body. Exception={e}",
                reason_tag="response-parse-error",
            ) from e

        if prices is None or len(prices) != 1:
            raise PriceResponseError(f"[{pair}] No expected price in response body", reason_tag="missing-price")

        try:
            price = Decimal(str(prices[0].price))
        except InvalidOperation as e:
            raise PriceResponseError(
                f"[{pair}] Price is not a number: {prices[0].price!r}",
                reason_tag="response-parse-error",
            ) from e

        return CurrencyPrice(
            price=price,
            base_currency=base_currency,
            counter_currency=counter_currency,
            as_of_millis=self._now_millis(),
        )
