"""Distinct-currency queries spanning several wallet tables."""

from sqlalchemy import select, union
from sqlalchemy.ext.asyncio import AsyncSession

from balancemonitor.db.models.blockchain_wallet import BlockchainWallet
from balancemonitor.db.models.currency_asset import UserCurrencyAsset
from balancemonitor.db.models.exchange_wallet import ExchangeWallet


class CurrencyRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def select_unique_wallet_currencies(self) -> list[str]:
        """Currencies held in any blockchain or exchange wallet of any user, ascending."""
        currencies = union(
            select(BlockchainWallet.currency),
            select(ExchangeWallet.currency),
        ).subquery()
        result = await self._session.execute(select(currencies.c.currency).order_by(currencies.c.currency))
        return list(result.scalars().all())

    async def find_unique_user_currencies(self, user_account_id: str) -> list[str]:
        """Currencies the user holds in blockchain wallets, exchange wallets or currency assets, ascending."""
        currencies = union(
            select(BlockchainWallet.currency).where(BlockchainWallet.user_account_id == user_account_id),
            select(ExchangeWallet.currency).where(ExchangeWallet.user_account_id == user_account_id),
            select(UserCurrencyAsset.currency).where(UserCurrencyAsset.user_account_id == user_account_id),
        ).subquery()
        result = await self._session.execute(select(currencies.c.currency).order_by(currencies.c.currency))
        return list(result.scalars().all())
