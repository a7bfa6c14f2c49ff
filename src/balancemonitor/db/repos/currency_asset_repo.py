import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from balancemonitor.db.models.currency_asset import UserCurrencyAsset


class CurrencyAssetRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_many(self, assets: list[UserCurrencyAsset]) -> int:
        self._session.add_all(assets)
        await self._session.flush()
        return len(assets)

    async def update(
        self,
        asset: UserCurrencyAsset,
        *,
        currency: str,
        balance: Decimal,
        description: Optional[str],
        wallet_address: Optional[str],
    ) -> UserCurrencyAsset:
        asset.currency = currency
        asset.balance = balance
        asset.description = description
        asset.wallet_address = wallet_address
        await self._session.flush()
        return asset

    async def find_one_by_user_and_id(self, user_account_id: str, asset_id: uuid.UUID) -> Optional[UserCurrencyAsset]:
        result = await self._session.execute(
            select(UserCurrencyAsset).where(
                UserCurrencyAsset.user_account_id == user_account_id,
                UserCurrencyAsset.id == asset_id,
            )
        )
        return result.scalar_one_or_none()

    async def find_many_by_user(self, user_account_id: str) -> list[UserCurrencyAsset]:
        result = await self._session.execute(
            select(UserCurrencyAsset)
            .where(UserCurrencyAsset.user_account_id == user_account_id)
            .order_by(UserCurrencyAsset.currency)
        )
        return list(result.scalars().all())

    async def find_many_by_user_and_currency(self, user_account_id: str, currency: str) -> list[UserCurrencyAsset]:
        result = await self._session.execute(
            select(UserCurrencyAsset).where(
                UserCurrencyAsset.user_account_id == user_account_id,
                UserCurrencyAsset.currency == currency,
            )
        )
        return list(result.scalars().all())

    async def select_user_currency_asset_summary(self, user_account_id: str) -> list[tuple[str, Decimal]]:
        result = await self._session.execute(
            select(UserCurrencyAsset.currency, func.sum(UserCurrencyAsset.balance))
            .where(UserCurrencyAsset.user_account_id == user_account_id)
            .group_by(UserCurrencyAsset.currency)
            .order_by(UserCurrencyAsset.currency)
        )
        return [(currency, balance) for currency, balance in result.all()]

    async def delete_by_user_and_id(self, user_account_id: str, asset_id: uuid.UUID) -> int:
        result = await self._session.execute(
            delete(UserCurrencyAsset).where(
                UserCurrencyAsset.user_account_id == user_account_id,
                UserCurrencyAsset.id == asset_id,
            )
        )
        return result.rowcount
