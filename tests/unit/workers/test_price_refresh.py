from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from balancemonitor.db.models import ExchangeWallet
from balancemonitor.db.repos import BlockchainWalletRepo, CurrencyPriceRepo, ExchangeWalletRepo
from balancemonitor.domain.models.price import CurrencyPrice
from balancemonitor.workers.price_refresh import JOB_ID, PriceRefreshScheduler


class TestPriceRefreshScheduler:
    def test_schedules_interval_job_starting_now(self, session_factory, price_service):
        scheduler = MagicMock()
        refresher = PriceRefreshScheduler(session_factory, price_service, scheduler, interval_seconds=600)

        refresher.schedule_refreshing()

        args, kwargs = scheduler.add_job.call_args
        assert args == (refresher.refresh_prices, "interval")
        assert kwargs["seconds"] == 600
        assert kwargs["id"] == JOB_ID
        assert kwargs["next_run_time"] is not None
        assert kwargs["max_instances"] == 1

    async def test_refreshes_wallet_currencies(self, session_factory, price_service):
        async with session_factory() as session:
            await BlockchainWalletRepo(session).insert("user-1", "0xabc", "ETH")
            await ExchangeWalletRepo(session).insert_many(
                [
                    ExchangeWallet(
                        user_account_id="user-2",
                        exchange="BINANCE",
                        exchange_user_id="acc-1",
                        currency="BTC",
                        balance=Decimal(1),
                        amount_in_orders=Decimal(0),
                        amount_available=Decimal(1),
                    )
                ]
            )
            await session.commit()
        refresher = PriceRefreshScheduler(session_factory, price_service, MagicMock())

        await refresher.refresh_prices()

        price_service.refresh_usd_prices.assert_awaited_once_with(["BTC", "ETH"])

    async def test_errors_are_logged_not_raised(self, session_factory, price_service, caplog):
        price_service.refresh_usd_prices.side_effect = OperationalError("SELECT", {}, Exception("db gone"))
        refresher = PriceRefreshScheduler(session_factory, price_service, MagicMock())

        await refresher.refresh_prices()
        await refresher.refresh_prices()

        assert price_service.refresh_usd_prices.await_count == 2
        assert "Could not refresh prices" in caplog.text

    async def test_refreshed_prices_are_saved(self, session_factory, price_service):
        price_service.refresh_usd_prices.return_value = [
            CurrencyPrice(price=Decimal("2100"), base_currency="ETH", counter_currency="USD", as_of_millis=5)
        ]
        refresher = PriceRefreshScheduler(session_factory, price_service, MagicMock())

        await refresher.refresh_prices()

        async with session_factory() as session:
            saved = await CurrencyPriceRepo(session).find_all()
        assert [(p.base_currency, p.price, p.as_of_millis) for p in saved] == [("ETH", Decimal("2100"), 5)]


class TestLoadSavedPrices:
    async def test_saved_prices_populate_cache(self, session_factory, price_service):
        eth = CurrencyPrice(price=Decimal("1900"), base_currency="ETH", counter_currency="USD", as_of_millis=7)
        async with session_factory() as session:
            await CurrencyPriceRepo(session).save_many([eth])
            await session.commit()
        refresher = PriceRefreshScheduler(session_factory, price_service, MagicMock())

        await refresher.load_saved_prices()

        price_service.populate.assert_called_once_with([eth])

    async def test_nothing_saved(self, session_factory, price_service):
        refresher = PriceRefreshScheduler(session_factory, price_service, MagicMock())

        await refresher.load_saved_prices()

        price_service.populate.assert_called_once_with([])

    async def test_errors_are_logged_not_raised(self, price_service, caplog):
        session_factory = MagicMock(side_effect=OperationalError("SELECT", {}, Exception("db gone")))
        refresher = PriceRefreshScheduler(session_factory, price_service, MagicMock())

        await refresher.load_saved_prices()

        price_service.populate.assert_not_called()
        assert "Could not load saved prices" in caplog.text
