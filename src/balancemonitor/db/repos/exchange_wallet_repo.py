from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from balancemonitor.db.models.exchange_wallet import ExchangeWallet, ExchangeWalletLastRefresh


class ExchangeWalletRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_many(self, wallets: list[ExchangeWallet]) -> None:
        self._session.add_all(wallets)
        await self._session.flush()

    async def find_many_by_user(self, user_account_id: str) -> list[ExchangeWallet]:
        result = await self._session.execute(
            select(ExchangeWallet)
            .where(ExchangeWallet.user_account_id == user_account_id)
            .order_by(ExchangeWallet.exchange_user_id, ExchangeWallet.exchange, ExchangeWallet.currency)
        )
        return list(result.scalars().all())

    async def find_many_by_user_and_currency(self, user_account_id: str, currency: str) -> list[ExchangeWallet]:
        result = await self._session.execute(
            select(ExchangeWallet)
            .where(
                ExchangeWallet.user_account_id == user_account_id,
                ExchangeWallet.currency == currency,
            )
            .order_by(ExchangeWallet.exchange, ExchangeWallet.exchange_user_id)
        )
        return list(result.scalars().all())

    async def delete_by_user(self, user_account_id: str) -> int:
        result = await self._session.execute(
            delete(ExchangeWallet).where(ExchangeWallet.user_account_id == user_account_id)
        )
        return result.rowcount

    async def select_user_currency_balances(self, user_account_id: str) -> list[tuple[str, Decimal]]:
        result = await self._session.execute(
            select(ExchangeWallet.currency, func.sum(ExchangeWallet.balance))
            .where(ExchangeWallet.user_account_id == user_account_id)
            .group_by(ExchangeWallet.currency)
            .order_by(ExchangeWallet.currency)
        )
        return [(currency, balance) for currency, balance in result.all()]


class ExchangeWalletLastRefreshRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_many(self, last_refreshes: list[ExchangeWalletLastRefresh]) -> None:
        self._session.add_all(last_refreshes)
        await self._session.flush()

    async def find_many_by_user(self, user_account_id: str) -> list[ExchangeWalletLastRefresh]:
        result = await self._session.execute(
            select(ExchangeWalletLastRefresh)
            .where(ExchangeWalletLastRefresh.user_account_id == user_account_id)
            .order_by(
                ExchangeWalletLastRefresh.inserted_at_millis,
                ExchangeWalletLastRefresh.exchange_user_id,
                ExchangeWalletLastRefresh.exchange,
            )
        )
        return list(result.scalars().all())

    async def delete_by_user(self, user_account_id: str) -> int:
        result = await self._session.execute(
            delete(ExchangeWalletLastRefresh).where(ExchangeWalletLastRefresh.user_account_id == user_account_id)
        )
        return result.rowcount
