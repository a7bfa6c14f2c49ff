from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from balancemonitor.domain.models.exchange import ExchangeAccountBalances, ExchangeBalance, ExchangeCurrencyBalance
from balancemonitor.wallet.exchange_service import ExchangeWalletService


def _currency(code: str, total: str, in_orders: str = "0") -> ExchangeCurrencyBalance:
    return ExchangeCurrencyBalance(
        currency_code=code,
        amount_available=Decimal(total) - Decimal(in_orders),
        total_amount=Decimal(total),
        amount_in_orders=Decimal(in_orders),
    )


def _account(exchange_user_id: str, *exchange_balances: ExchangeBalance) -> ExchangeAccountBalances:
    return ExchangeAccountBalances(
        exchange_user_id=exchange_user_id,
        exchange_user_name=f"{exchange_user_id}-name",
        exchange_balances=list(exchange_balances),
    )


@pytest.fixture()
def mediator():
    return AsyncMock()


@pytest.fixture()
def service(session_factory, mediator, price_service):
    return ExchangeWalletService(session_factory, mediator, price_service, now_millis=lambda: 1700000000000)


class TestRefreshWalletBalances:
    async def test_snapshot_is_stored(self, service, mediator):
        mediator.get_user_balances.return_value = [
            _account(
                "acc-1",
                ExchangeBalance(
                    exchange_name="BINANCE",
                    currency_balances=[_currency("ETH", "2", "0.5"), _currency("BTC", "0.25")],
                ),
                ExchangeBalance(exchange_name="KRAKEN", error_message="Invalid API key"),
            )
        ]

        await service.refresh_wallet_balances("user-1")
        balances = await service.get_wallet_balances("user-1")

        assert balances.refresh_time_millis == 1700000000000
        [account] = balances.exchange_currency_balances
        assert account.exchange_user_id == "acc-1"
        assert account.exchange_user_name == "acc-1-name"
        binance, kraken = account.exchange_balances
        assert binance.exchange_name == "BINANCE"
        eth = next(c for c in binance.currency_balances if c.currency_code == "ETH")
        assert eth.total_amount == Decimal(2)
        assert eth.amount_in_orders == Decimal("0.5")
        assert eth.amount_available == Decimal("1.5")
        assert eth.usd_value == Decimal(200)
        assert kraken.error_message == "Invalid API key"
        assert kraken.currency_balances == []

    async def test_refresh_replaces_previous_snapshot(self, service, mediator):
        mediator.get_user_balances.return_value = [
            _account("acc-1", ExchangeBalance(exchange_name="BINANCE", currency_balances=[_currency("ETH", "2")]))
        ]
        await service.refresh_wallet_balances("user-1")

        mediator.get_user_balances.return_value = [
            _account("acc-2", ExchangeBalance(exchange_name="KRAKEN", currency_balances=[_currency("BTC", "1")]))
        ]
        await service.refresh_wallet_balances("user-1")

        balances = await service.get_wallet_balances("user-1")
        assert [a.exchange_user_id for a in balances.exchange_currency_balances] == ["acc-2"]
        currency_balances = await service.get_currency_balances("user-1")
        assert [(c.currency, c.balance) for c in currency_balances] == [("BTC", Decimal(1))]

    async def test_unreachable_mediator_clears_snapshot(self, service, mediator):
        mediator.get_user_balances.return_value = [
            _account("acc-1", ExchangeBalance(exchange_name="BINANCE", currency_balances=[_currency("ETH", "2")]))
        ]
        await service.refresh_wallet_balances("user-1")
        mediator.get_user_balances.return_value = []

        await service.refresh_wallet_balances("user-1")

        balances = await service.get_wallet_balances("user-1")
        assert balances.refresh_time_millis is None
        assert balances.exchange_currency_balances == []

    async def test_other_users_untouched(self, service, mediator):
        mediator.get_user_balances.return_value = [
            _account("acc-1", ExchangeBalance(exchange_name="BINANCE", currency_balances=[_currency("ETH", "2")]))
        ]
        await service.refresh_wallet_balances("user-1")
        mediator.get_user_balances.return_value = []
        await service.refresh_wallet_balances("user-2")

        assert len((await service.get_wallet_balances("user-1")).exchange_currency_balances) == 1


class TestCurrencyBalances:
    async def test_sums_across_exchanges(self, service, mediator):
        mediator.get_user_balances.return_value = [
            _account(
                "acc-1",
                ExchangeBalance(exchange_name="BINANCE", currency_balances=[_currency("ETH", "1.5")]),
                ExchangeBalance(exchange_name="KRAKEN", currency_balances=[_currency("ETH", "0.5")]),
            )
        ]
        await service.refresh_wallet_balances("user-1")

        [eth] = await service.get_currency_balances("user-1")

        assert eth.balance == Decimal(2)
        assert eth.usd_value == Decimal(200)
        assert eth.usd_price == Decimal(100)

    async def test_unpriced_currency_has_no_value(self, service, mediator):
        mediator.get_user_balances.return_value = [
            _account("acc-1", ExchangeBalance(exchange_name="BINANCE", currency_balances=[_currency("XYZ", "5")]))
        ]
        await service.refresh_wallet_balances("user-1")

        [xyz] = await service.get_currency_balances("user-1")

        assert xyz.balance == Decimal(5)
        assert xyz.usd_value is None
        assert xyz.usd_price is None
