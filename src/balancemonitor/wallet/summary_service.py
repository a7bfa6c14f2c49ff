"""Per-currency balance summary across blockchain wallets, exchange wallets and currency assets."""

import asyncio
import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from balancemonitor.db.models.blockchain_wallet import BlockchainWallet
from balancemonitor.db.models.exchange_wallet import ExchangeWallet
from balancemonitor.db.repos.blockchain_wallet_repo import BlockchainWalletRepo
from balancemonitor.db.repos.currency_repo import CurrencyRepo
from balancemonitor.db.repos.exchange_wallet_repo import ExchangeWalletRepo
from balancemonitor.domain.models.balance import (
    BlockchainWalletCurrencySummary,
    CurrencyAssetWithValue,
    CurrencyBalanceSummary,
    ExchangeCurrencySummary,
)
from balancemonitor.exceptions import UnsupportedCurrencyError
from balancemonitor.infra.price.caching import CachingPriceService
from balancemonitor.wallet.blockchain_service import BlockchainWalletService
from balancemonitor.wallet.currency_asset_service import CurrencyAssetService
from balancemonitor.wallet.exchange_service import ExchangeWalletService

logger = logging.getLogger(__name__)


def sum_balances(
    wallets: list[BlockchainWallet],
    exchange_wallets: list[ExchangeWallet],
    currency_assets: list[CurrencyAssetWithValue],
) -> Decimal | None:
    """Total of one currency over all sources.

    None only when nothing is known: no blockchain wallet has been refreshed yet and there
    are no exchange wallets or currency assets. Otherwise unrefreshed wallets count as zero.
    """
    wallet_balances = [w.balance for w in wallets if w.balance is not None]
    if not wallet_balances and not exchange_wallets and not currency_assets:
        return None
    return (
        sum(wallet_balances, Decimal(0))
        + sum((e.balance for e in exchange_wallets), Decimal(0))
        + sum((a.balance for a in currency_assets), Decimal(0))
    )


class BalanceSummaryService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        blockchain_wallet_service: BlockchainWalletService,
        exchange_wallet_service: ExchangeWalletService,
        currency_asset_service: CurrencyAssetService,
        price_service: CachingPriceService,
    ) -> None:
        self._session_factory = session_factory
        self._blockchain_wallets = blockchain_wallet_service
        self._exchange_wallets = exchange_wallet_service
        self._currency_assets = currency_asset_service
        self._price_service = price_service

    async def get_currency_balance_summary(self, user_account_id: str) -> list[CurrencyBalanceSummary]:
        async with self._session_factory() as session:
            currencies = await CurrencyRepo(session).find_unique_user_currencies(user_account_id)
            wallet_repo = BlockchainWalletRepo(session)
            exchange_repo = ExchangeWalletRepo(session)
            rows = [
                (
                    currency,
                    await wallet_repo.find_many_by_user_and_currency(user_account_id, currency),
                    await exchange_repo.find_many_by_user_and_currency(user_account_id, currency),
                )
                for currency in currencies
            ]

        summaries = []
        for currency, wallets, exchange_wallets in rows:
            currency_assets = await self._currency_assets.get_user_currency_assets(user_account_id, currency)
            summaries.append(await self._summarize(currency, wallets, exchange_wallets, currency_assets))
        return summaries

    async def refresh_balance_summary(self, user_account_id: str) -> list[CurrencyBalanceSummary]:
        """Refresh blockchain and exchange wallets concurrently, then summarize.

        A failing source is logged and does not stop the other one.
        """
        results = await asyncio.gather(
            self._blockchain_wallets.refresh_wallet_balances(user_account_id),
            self._exchange_wallets.refresh_wallet_balances(user_account_id),
            return_exceptions=True,
        )
        for source, result in zip(("blockchain", "exchange"), results):
            if isinstance(result, UnsupportedCurrencyError):
                raise result
            if isinstance(result, BaseException):
                logger.error("Could not refresh %s wallets of user %s", source, user_account_id, exc_info=result)
        return await self.get_currency_balance_summary(user_account_id)

    async def _summarize(
        self,
        currency: str,
        wallets: list[BlockchainWallet],
        exchange_wallets: list[ExchangeWallet],
        currency_assets: list[CurrencyAssetWithValue],
    ) -> CurrencyBalanceSummary:
        balance = sum_balances(wallets, exchange_wallets, currency_assets)
        get_usd_value = self._price_service.get_usd_value
        return CurrencyBalanceSummary(
            currency=currency,
            balance=balance,
            usd_value=await get_usd_value(currency, balance) if balance is not None else None,
            usd_price=await self._price_service.get_usd_price(currency),
            exchanges=[
                ExchangeCurrencySummary(
                    exchange_name=e.exchange,
                    balance=e.balance,
                    usd_value=await get_usd_value(currency, e.balance),
                )
                for e in exchange_wallets
            ],
            wallets=[
                BlockchainWalletCurrencySummary(
                    wallet_address=w.wallet_address,
                    balance=w.balance,
                    usd_value=await get_usd_value(currency, w.balance) if w.balance is not None else None,
                )
                for w in wallets
            ],
            currency_assets=currency_assets,
        )
