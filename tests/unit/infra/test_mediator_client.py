"""Tests for ExchangeMediatorClient with mocked HTTP."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from balancemonitor.infra.exchange.mediator_client import ExchangeMediatorClient

BALANCES = [
    {
        "exchangeUserId": "acc-1",
        "exchangeUserName": "main",
        "exchangeBalances": [
            {
                "exchangeName": "BINANCE",
                "errorMessage": None,
                "currencyBalances": [
                    {
                        "currencyCode": "ETH",
                        "amountAvailable": "1.5",
                        "totalAmount": "2",
                        "amountInOrders": "0.5",
                    }
                ],
            },
            {"exchangeName": "KRAKEN", "errorMessage": "Invalid API key", "currencyBalances": []},
        ],
    }
]


@pytest.fixture()
def mock_http():
    return AsyncMock()


@pytest.fixture()
def client(mock_http):
    return ExchangeMediatorClient("http://mediator.test/", mock_http)


def _mock_response(status_code: int, data=None, text: str = ""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    resp.text = text
    return resp


class TestExchangeMediatorClient:
    async def test_parses_balances(self, client, mock_http):
        mock_http.get.return_value = _mock_response(200, BALANCES)

        accounts = await client.get_user_balances("user-1")

        mock_http.get.assert_awaited_once_with("http://mediator.test/wallet/currency-balances/user/user-1")
        assert len(accounts) == 1
        account = accounts[0]
        assert account.exchange_user_id == "acc-1"
        assert [b.exchange_name for b in account.exchange_balances] == ["BINANCE", "KRAKEN"]
        eth = account.exchange_balances[0].currency_balances[0]
        assert eth.currency_code == "ETH"
        assert eth.total_amount == Decimal(2)
        assert account.exchange_balances[1].error_message == "Invalid API key"

    async def test_error_status_returns_empty(self, client, mock_http):
        mock_http.get.return_value = _mock_response(502, text="Bad gateway")

        assert await client.get_user_balances("user-1") == []

    async def test_transport_error_returns_empty(self, client, mock_http):
        mock_http.get.side_effect = httpx.ConnectError("connection refused")

        assert await client.get_user_balances("user-1") == []

    async def test_malformed_body_returns_empty(self, client, mock_http):
        mock_http.get.return_value = _mock_response(200, [{"unexpected": True}])

        assert await client.get_user_balances("user-1") == []
