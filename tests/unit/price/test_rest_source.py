"""Tests for RestPriceSource with mocked HTTP."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from balancemonitor.exceptions import PriceResponseError
from balancemonitor.infra.price.rest_source import RestPriceSource


def _source(status_code: int = 200, body=None, json_error: Exception | None = None) -> tuple[RestPriceSource, MagicMock]:
    mock_response = MagicMock()
    mock_response.status_code = status_code
    if json_error is not None:
        mock_response.json.side_effect = json_error
    else:
        mock_response.json.return_value = body

    mock_http = MagicMock()
    mock_http.get = AsyncMock(return_value=mock_response)
    return RestPriceSource("http://prices.test/", mock_http, now_millis=lambda: 1700000000000), mock_http


class TestRestPriceSource:
    async def test_successful_price_fetch(self):
        source, mock_http = _source(
            body=[{"price": "2050.25", "baseCurrency": "ETH", "counterCurrency": "USD"}],
        )

        price = await source.get_price("ETH", "USD")

        assert price.price == Decimal("2050.25")
        assert price.base_currency == "ETH"
        assert price.counter_currency == "USD"
        assert price.as_of_millis == 1700000000000
        mock_http.get.assert_awaited_once_with(
            "http://prices.test/prices/USD",
            params={"currencyCodes": "ETH"},
        )

    async def test_numeric_price_is_accepted(self):
        source, _ = _source(body=[{"price": 0.5, "baseCurrency": "XRP", "counterCurrency": "USD"}])

        price = await source.get_price("XRP", "USD")
        assert price.price == Decimal("0.5")

    async def test_same_currency_skips_http(self):
        source, mock_http = _source()

        price = await source.get_price("BTC", "BTC")

        assert price.price == Decimal(1)
        mock_http.get.assert_not_called()

    async def test_error_status_is_request_error(self):
        source, _ = _source(status_code=503)

        with pytest.raises(PriceResponseError) as exc_info:
            await source.get_price("ETH", "USD")
        assert exc_info.value.reason_tag == "request-error"

    async def test_empty_list_is_missing_price(self):
        source, _ = _source(body=[])

        with pytest.raises(PriceResponseError) as exc_info:
            await source.get_price("ETH", "USD")
        assert exc_info.value.reason_tag == "missing-price"

    async def test_two_prices_is_missing_price(self):
        item = {"price": "1", "baseCurrency": "ETH", "counterCurrency": "USD"}
        source, _ = _source(body=[item, item])

        with pytest.raises(PriceResponseError) as exc_info:
            await source.get_price("ETH", "USD")
        assert exc_info.value.reason_tag == "missing-price"

    async def test_object_body_is_missing_price(self):
        source, _ = _source(body={"price": "1"})

        with pytest.raises(PriceResponseError) as exc_info:
            await source.get_price("ETH", "USD")
        assert exc_info.value.reason_tag == "missing-price"

    async def test_invalid_json_is_parse_error(self):
        source, _ = _source(json_error=ValueError("Expecting value"))

        with pytest.raises(PriceResponseError) as exc_info:
            await source.get_price("ETH", "USD")
        assert exc_info.value.reason_tag == "response-parse-error"

    async def test_malformed_item_is_parse_error(self):
        source, _ = _source(body=[{"baseCurrency": "ETH"}])

        with pytest.raises(PriceResponseError) as exc_info:
            await source.get_price("ETH", "USD")
        assert exc_info.value.reason_tag == "response-parse-error"

    async def test_non_numeric_price_is_parse_error(self):
        source, _ = _source(body=[{"price": "n/a", "baseCurrency": "ETH", "counterCurrency": "USD"}])

        with pytest.raises(PriceResponseError) as exc_info:
            await source.get_price("ETH", "USD")
        assert exc_info.value.reason_tag == "response-parse-error"
