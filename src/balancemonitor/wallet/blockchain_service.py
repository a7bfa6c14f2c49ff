"""Blockchain wallets tracked by the user: add/update with duplicate detection and on-chain balance refresh."""

import asyncio
import logging
import uuid
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from balancemonitor.db.models.blockchain_wallet import BlockchainWallet
from balancemonitor.db.repos.blockchain_wallet_repo import BlockchainWalletRepo
from balancemonitor.domain.models.balance import (
    BlockchainWalletWithValue,
    CurrencyBalance,
    WalletAddResult,
    WalletUpdate,
    WalletUpdateResult,
)
from balancemonitor.exceptions import UnsupportedCurrencyError
from balancemonitor.infra.blockchain.base import BlockchainBalanceRegistry
from balancemonitor.infra.price.caching import CachingPriceService

logger = logging.getLogger(__name__)


class BlockchainWalletService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        balance_registry: BlockchainBalanceRegistry,
        price_service: CachingPriceService,
    ) -> None:
        self._session_factory = session_factory
        self._balance_registry = balance_registry
        self._price_service = price_service

    def supports_currency(self, currency: str) -> bool:
        return self._balance_registry.supports(currency)

    async def add_wallet(
        self,
        user_account_id: str,
        wallet_address: str,
        currency: str,
        description: str | None = None,
    ) -> WalletAddResult:
        """Insert the wallet unless the user already tracks this address, then try to fetch its balance once."""
        if not self._balance_registry.supports(currency):
            raise UnsupportedCurrencyError(currency)
        async with self._session_factory() as session:
            repo = BlockchainWalletRepo(session)
            if await repo.exists_by_user_and_address(user_account_id, wallet_address):
                return WalletAddResult(user_already_has_wallet_with_this_address=True)
            try:
                wallet = await repo.insert(user_account_id, wallet_address, currency, description)
                await session.commit()
            except IntegrityError:
                # lost a race with a concurrent add of the same address
                await session.rollback()
                return WalletAddResult(user_already_has_wallet_with_this_address=True)

            await self._update_balance_if_fetched(session, repo, wallet)
        return WalletAddResult(user_already_has_wallet_with_this_address=False)

    async def update_wallet(self, user_account_id: str, update: WalletUpdate) -> WalletUpdateResult:
        if not self._balance_registry.supports(update.currency):
            raise UnsupportedCurrencyError(update.currency)
        async with self._session_factory() as session:
            repo = BlockchainWalletRepo(session)
            wallet = await repo.find_one_by_user_and_id(user_account_id, update.id)
            if wallet is None:
                return WalletUpdateResult(user_has_no_wallet_with_given_id=True)

            address_changed = wallet.wallet_address != update.wallet_address
            if address_changed and await repo.exists_by_user_and_address(user_account_id, update.wallet_address):
                return WalletUpdateResult(user_already_has_wallet_with_this_address=True)

            wallet.wallet_address = update.wallet_address
            wallet.currency = update.currency
            wallet.description = update.description
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                return WalletUpdateResult(user_already_has_wallet_with_this_address=True)

            await self._update_balance_if_fetched(session, repo, wallet)
        return WalletUpdateResult()

    async def refresh_wallet_balances(self, user_account_id: str) -> list[BlockchainWalletWithValue]:
        """Fetch every wallet's balance concurrently. Wallets whose fetch failed keep their stored balance."""
        async with self._session_factory() as session:
            repo = BlockchainWalletRepo(session)
            wallets = await repo.find_many_by_user(user_account_id)
            balances = await asyncio.gather(*(self._fetch_balance(w.currency, w.wallet_address) for w in wallets))
            for wallet, balance in zip(wallets, balances):
                if balance is not None:
                    await repo.update_balance(wallet, balance)
            await session.commit()
            logger.info(
                "Refreshed %d of %d blockchain wallets of user %s",
                sum(1 for b in balances if b is not None),
                len(wallets),
                user_account_id,
            )
        return [await self._with_value(w) for w in wallets]

    async def get_wallets(self, user_account_id: str) -> list[BlockchainWalletWithValue]:
        async with self._session_factory() as session:
            wallets = await BlockchainWalletRepo(session).find_many_by_user(user_account_id)
        return [await self._with_value(w) for w in wallets]

    async def get_wallet(self, user_account_id: str, wallet_id: uuid.UUID) -> BlockchainWalletWithValue | None:
        async with self._session_factory() as session:
            wallet = await BlockchainWalletRepo(session).find_one_by_user_and_id(user_account_id, wallet_id)
        if wallet is None:
            return None
        return await self._with_value(wallet)

    async def get_currency_balances(self, user_account_id: str) -> list[CurrencyBalance]:
        async with self._session_factory() as session:
            rows = await BlockchainWalletRepo(session).select_user_currency_balances(user_account_id)
        result = []
        for currency, balance in rows:
            usd_value = await self._price_service.get_usd_value(currency, balance) if balance is not None else None
            result.append(
                CurrencyBalance(
                    currency=currency,
                    balance=balance,
                    usd_value=usd_value,
                    usd_price=await self._price_service.get_usd_price(currency),
                )
            )
        return result

    async def delete_wallet_by_address(self, user_account_id: str, wallet_address: str) -> bool:
        async with self._session_factory() as session:
            deleted = await BlockchainWalletRepo(session).delete_by_user_and_address(user_account_id, wallet_address)
            await session.commit()
        return deleted > 0

    async def delete_wallet_by_id(self, user_account_id: str, wallet_id: uuid.UUID) -> bool:
        async with self._session_factory() as session:
            deleted = await BlockchainWalletRepo(session).delete_by_user_and_id(user_account_id, wallet_id)
            await session.commit()
        return deleted > 0

    async def _update_balance_if_fetched(
        self, session: AsyncSession, repo: BlockchainWalletRepo, wallet: BlockchainWallet
    ) -> None:
        balance = await self._fetch_balance(wallet.currency, wallet.wallet_address)
        if balance is not None:
            await repo.update_balance(wallet, balance)
            await session.commit()

    async def _fetch_balance(self, currency: str, wallet_address: str) -> Decimal | None:
        try:
            balance = await self._balance_registry.get_balance(currency, wallet_address)
        except UnsupportedCurrencyError:
            raise
        except Exception:
            logger.exception("Could not fetch %s balance of %s", currency, wallet_address)
            return None
        if balance is None:
            logger.warning("No %s balance fetched for %s, keeping the stored one", currency, wallet_address)
        return balance

    async def _with_value(self, wallet: BlockchainWallet) -> BlockchainWalletWithValue:
        usd_value = None
        if wallet.balance is not None:
            usd_value = await self._price_service.get_usd_value(wallet.currency, wallet.balance)
        return BlockchainWalletWithValue(
            id=wallet.id,
            wallet_address=wallet.wallet_address,
            currency=wallet.currency,
            description=wallet.description,
            balance=wallet.balance,
            usd_value=usd_value,
        )
