"""Periodic job keeping the price cache warm for every currency held in any wallet.

Refreshed prices are saved to the database so a restarted service starts with a warm cache.
"""

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from balancemonitor.db.repos.currency_price_repo import CurrencyPriceRepo
from balancemonitor.db.repos.currency_repo import CurrencyRepo
from balancemonitor.infra.price.caching import CachingPriceService

logger = logging.getLogger(__name__)

JOB_ID = "refresh-wallet-currency-prices"


class PriceRefreshScheduler:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        price_service: CachingPriceService,
        scheduler: AsyncIOScheduler,
        interval_seconds: int = 3600,
    ) -> None:
        self._session_factory = session_factory
        self._price_service = price_service
        self._scheduler = scheduler
        self._interval_seconds = interval_seconds
        self._first_run = True

    def schedule_refreshing(self) -> None:
        """Register the refresh job. The first run fires right away, the next ones every interval."""
        logger.info("Scheduling refreshing prices existing in wallets every %ds", self._interval_seconds)
        self._scheduler.add_job(
            self.refresh_prices,
            "interval",
            seconds=self._interval_seconds,
            next_run_time=datetime.now(timezone.utc),
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

    async def refresh_prices(self) -> None:
        try:
            if self._first_run:
                logger.info("Refreshing prices existing in wallets for the first time")
                self._first_run = False
            async with self._session_factory() as session:
                currencies = await CurrencyRepo(session).select_unique_wallet_currencies()
            refreshed = await self._price_service.refresh_usd_prices(currencies)
            logger.info("Refreshed %d of %d wallet currency prices", len(refreshed), len(currencies))
            async with self._session_factory() as session:
                await CurrencyPriceRepo(session).save_many(refreshed)
                await session.commit()
        except Exception:
            logger.exception("Could not refresh prices")

    async def load_saved_prices(self) -> None:
        """Put the prices saved by earlier runs into the price cache. Called once before scheduling."""
        try:
            async with self._session_factory() as session:
                prices = await CurrencyPriceRepo(session).find_all()
            self._price_service.populate(prices)
        except Exception:
            logger.exception("Could not load saved prices")
