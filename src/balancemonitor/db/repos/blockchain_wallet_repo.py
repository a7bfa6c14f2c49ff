import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from balancemonitor.db.models.blockchain_wallet import BlockchainWallet


class BlockchainWalletRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(
        self,
        user_account_id: str,
        wallet_address: str,
        currency: str,
        description: Optional[str] = None,
        balance: Optional[Decimal] = None,
    ) -> BlockchainWallet:
        wallet = BlockchainWallet(
            user_account_id=user_account_id,
            wallet_address=wallet_address,
            currency=currency,
            description=description,
            balance=balance,
        )
        self._session.add(wallet)
        await self._session.flush()
        return wallet

    async def update_balance(self, wallet: BlockchainWallet, balance: Decimal) -> BlockchainWallet:
        wallet.balance = balance
        await self._session.flush()
        return wallet

    async def find_many_by_user(self, user_account_id: str) -> list[BlockchainWallet]:
        result = await self._session.execute(
            select(BlockchainWallet)
            .where(BlockchainWallet.user_account_id == user_account_id)
            .order_by(BlockchainWallet.currency, BlockchainWallet.wallet_address)
        )
        return list(result.scalars().all())

    async def find_many_by_user_and_currency(self, user_account_id: str, currency: str) -> list[BlockchainWallet]:
        result = await self._session.execute(
            select(BlockchainWallet)
            .where(
                BlockchainWallet.user_account_id == user_account_id,
                BlockchainWallet.currency == currency,
            )
            .order_by(BlockchainWallet.wallet_address)
        )
        return list(result.scalars().all())

    async def find_one_by_user_and_id(self, user_account_id: str, wallet_id: uuid.UUID) -> Optional[BlockchainWallet]:
        result = await self._session.execute(
            select(BlockchainWallet).where(
                BlockchainWallet.user_account_id == user_account_id,
                BlockchainWallet.id == wallet_id,
            )
        )
        return result.scalar_one_or_none()

    async def exists_by_user_and_address(self, user_account_id: str, wallet_address: str) -> bool:
        result = await self._session.execute(
            select(
                exists().where(
                    BlockchainWallet.user_account_id == user_account_id,
                    BlockchainWallet.wallet_address == wallet_address,
                )
            )
        )
        return bool(result.scalar())

    async def delete_by_user_and_address(self, user_account_id: str, wallet_address: str) -> int:
        result = await self._session.execute(
            delete(BlockchainWallet).where(
                BlockchainWallet.user_account_id == user_account_id,
                BlockchainWallet.wallet_address == wallet_address,
            )
        )
        return result.rowcount

    async def delete_by_user_and_id(self, user_account_id: str, wallet_id: uuid.UUID) -> int:
        result = await self._session.execute(
            delete(BlockchainWallet).where(
                BlockchainWallet.user_account_id == user_account_id,
                BlockchainWallet.id == wallet_id,
            )
        )
        return result.rowcount

    async def select_user_currency_balances(self, user_account_id: str) -> list[tuple[str, Optional[Decimal]]]:
        """Sum of balances per currency. A currency whose wallets were never refreshed sums to None."""
        result = await self._session.execute(
            select(BlockchainWallet.currency, func.sum(BlockchainWallet.balance))
            .where(BlockchainWallet.user_account_id == user_account_id)
            .group_by(BlockchainWallet.currency)
            .order_by(BlockchainWallet.currency)
        )
        return [(currency, balance) for currency, balance in result.all()]
