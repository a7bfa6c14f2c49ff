"""Manually entered currency balances, valued in USD."""

import logging
import uuid
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from balancemonitor.db.models.currency_asset import UserCurrencyAsset
from balancemonitor.db.repos.currency_asset_repo import CurrencyAssetRepo
from balancemonitor.domain.models.balance import CurrencyAssetWithValue, CurrencyBalance, NewCurrencyAsset
from balancemonitor.infra.price.caching import CachingPriceService

logger = logging.getLogger(__name__)


class CurrencyAssetService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        price_service: CachingPriceService,
    ) -> None:
        self._session_factory = session_factory
        self._price_service = price_service

    async def get_user_currency_assets(
        self, user_account_id: str, currency: str | None = None
    ) -> list[CurrencyAssetWithValue]:
        async with self._session_factory() as session:
            repo = CurrencyAssetRepo(session)
            if currency is None:
                assets = await repo.find_many_by_user(user_account_id)
            else:
                assets = await repo.find_many_by_user_and_currency(user_account_id, currency)
        return [await self._with_value(a) for a in assets]

    async def get_user_currency_asset(self, user_account_id: str, asset_id: uuid.UUID) -> CurrencyAssetWithValue | None:
        async with self._session_factory() as session:
            asset = await CurrencyAssetRepo(session).find_one_by_user_and_id(user_account_id, asset_id)
        if asset is None:
            return None
        return await self._with_value(asset)

    async def get_user_currency_assets_summary(self, user_account_id: str) -> list[CurrencyBalance]:
        async with self._session_factory() as session:
            rows = await CurrencyAssetRepo(session).select_user_currency_asset_summary(user_account_id)
        return [
            CurrencyBalance(
                currency=currency,
                balance=balance,
                usd_value=await self._price_service.get_usd_value(currency, balance),
                usd_price=await self._price_service.get_usd_price(currency),
            )
            for currency, balance in rows
        ]

    async def add_currency_assets(self, user_account_id: str, assets: list[NewCurrencyAsset]) -> int:
        async with self._session_factory() as session:
            inserted = await CurrencyAssetRepo(session).insert_many(
                [
                    UserCurrencyAsset(
                        user_account_id=user_account_id,
                        currency=asset.currency,
                        balance=asset.balance,
                        description=asset.description,
                        wallet_address=asset.wallet_address,
                    )
                    for asset in assets
                ]
            )
            await session.commit()
        logger.info("User %s added %d currency assets", user_account_id, inserted)
        return inserted

    async def update_currency_asset(
        self,
        user_account_id: str,
        asset_id: uuid.UUID,
        *,
        currency: str,
        balance: Decimal,
        description: str | None = None,
        wallet_address: str | None = None,
    ) -> CurrencyAssetWithValue | None:
        """Update an asset the user owns. None when there is no such asset for this user."""
        async with self._session_factory() as session:
            repo = CurrencyAssetRepo(session)
            asset = await repo.find_one_by_user_and_id(user_account_id, asset_id)
            if asset is None:
                logger.warning(
                    "User %s tried to update currency asset %s which was not found", user_account_id, asset_id
                )
                return None
            await repo.update(
                asset,
                currency=currency,
                balance=balance,
                description=description,
                wallet_address=wallet_address,
            )
            await session.commit()
        return await self._with_value(asset)

    async def delete_currency_asset(self, user_account_id: str, asset_id: uuid.UUID) -> bool:
        async with self._session_factory() as session:
            deleted = await CurrencyAssetRepo(session).delete_by_user_and_id(user_account_id, asset_id)
            await session.commit()
        if not deleted:
            logger.warning("User %s tried to delete currency asset %s which was not found", user_account_id, asset_id)
        return deleted > 0

    async def _with_value(self, asset: UserCurrencyAsset) -> CurrencyAssetWithValue:
        return CurrencyAssetWithValue(
            id=asset.id,
            currency=asset.currency,
            balance=asset.balance,
            description=asset.description,
            wallet_address=asset.wallet_address,
            usd_value=await self._price_service.get_usd_value(asset.currency, asset.balance),
        )
