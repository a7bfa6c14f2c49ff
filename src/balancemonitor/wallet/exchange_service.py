"""Exchange balances imported from the exchange mediator."""

import logging
import time
from collections import defaultdict
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from balancemonitor.db.models.exchange_wallet import ExchangeWallet, ExchangeWalletLastRefresh
from balancemonitor.db.repos.exchange_wallet_repo import ExchangeWalletLastRefreshRepo, ExchangeWalletRepo
from balancemonitor.domain.models.balance import CurrencyBalance
from balancemonitor.domain.models.exchange import (
    ExchangeAccountBalancesWithValue,
    ExchangeBalanceWithValue,
    ExchangeCurrencyBalanceWithValue,
    ExchangeWalletBalances,
)
from balancemonitor.infra.exchange.mediator_client import ExchangeMediatorClient
from balancemonitor.infra.price.caching import CachingPriceService

logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


class ExchangeWalletService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        mediator_client: ExchangeMediatorClient,
        price_service: CachingPriceService,
        now_millis: Callable[[], int] = _now_millis,
    ) -> None:
        self._session_factory = session_factory
        self._mediator = mediator_client
        self._price_service = price_service
        self._now_millis = now_millis

    async def refresh_wallet_balances(self, user_account_id: str) -> None:
        """Replace every stored exchange balance of the user with what the mediator reports now.

        An unreachable mediator yields an empty snapshot, which clears the user's exchange wallets.
        """
        accounts = await self._mediator.get_user_balances(user_account_id)
        inserted_at = self._now_millis()
        last_refreshes: list[ExchangeWalletLastRefresh] = []
        wallets: list[ExchangeWallet] = []
        for account in accounts:
            for exchange_balance in account.exchange_balances:
                last_refreshes.append(
                    ExchangeWalletLastRefresh(
                        user_account_id=user_account_id,
                        exchange=exchange_balance.exchange_name,
                        exchange_user_id=account.exchange_user_id,
                        exchange_user_name=account.exchange_user_name,
                        error_message=exchange_balance.error_message,
                        inserted_at_millis=inserted_at,
                    )
                )
                if exchange_balance.error_message:
                    logger.warning(
                        "Exchange %s of exchange user %s reported an error: %s",
                        exchange_balance.exchange_name,
                        account.exchange_user_id,
                        exchange_balance.error_message,
                    )
                for currency_balance in exchange_balance.currency_balances:
                    wallets.append(
                        ExchangeWallet(
                            user_account_id=user_account_id,
                            exchange=exchange_balance.exchange_name,
                            exchange_user_id=account.exchange_user_id,
                            currency=currency_balance.currency_code,
                            balance=currency_balance.total_amount,
                            amount_in_orders=currency_balance.amount_in_orders,
                            amount_available=currency_balance.amount_available,
                        )
                    )

        async with self._session_factory() as session:
            wallet_repo = ExchangeWalletRepo(session)
            last_refresh_repo = ExchangeWalletLastRefreshRepo(session)
            await wallet_repo.delete_by_user(user_account_id)
            await last_refresh_repo.delete_by_user(user_account_id)
            await last_refresh_repo.insert_many(last_refreshes)
            await wallet_repo.insert_many(wallets)
            await session.commit()
        logger.info(
            "Stored %d exchange wallets from %d exchanges for user %s",
            len(wallets),
            len(last_refreshes),
            user_account_id,
        )

    async def get_wallet_balances(self, user_account_id: str) -> ExchangeWalletBalances:
        async with self._session_factory() as session:
            wallets = await ExchangeWalletRepo(session).find_many_by_user(user_account_id)
            last_refreshes = await ExchangeWalletLastRefreshRepo(session).find_many_by_user(user_account_id)

        wallets_by_account_and_exchange: dict[tuple[str, str], list[ExchangeWallet]] = defaultdict(list)
        for wallet in wallets:
            wallets_by_account_and_exchange[(wallet.exchange_user_id, wallet.exchange)].append(wallet)

        # dicts keep the order in which exchange accounts were first seen
        accounts: dict[str, ExchangeAccountBalancesWithValue] = {}
        for last_refresh in last_refreshes:
            account = accounts.get(last_refresh.exchange_user_id)
            if account is None:
                account = ExchangeAccountBalancesWithValue(
                    exchange_user_id=last_refresh.exchange_user_id,
                    exchange_user_name=last_refresh.exchange_user_name,
                )
                accounts[last_refresh.exchange_user_id] = account
            currency_balances = [
                ExchangeCurrencyBalanceWithValue(
                    currency_code=wallet.currency,
                    amount_available=wallet.amount_available,
                    total_amount=wallet.balance,
                    amount_in_orders=wallet.amount_in_orders,
                    usd_value=await self._price_service.get_usd_value(wallet.currency, wallet.balance),
                )
                for wallet in wallets_by_account_and_exchange.get(
                    (last_refresh.exchange_user_id, last_refresh.exchange), []
                )
            ]
            account.exchange_balances.append(
                ExchangeBalanceWithValue(
                    exchange_name=last_refresh.exchange,
                    error_message=last_refresh.error_message,
                    currency_balances=currency_balances,
                )
            )

        return ExchangeWalletBalances(
            refresh_time_millis=last_refreshes[0].inserted_at_millis if last_refreshes else None,
            exchange_currency_balances=list(accounts.values()),
        )

    async def get_currency_balances(self, user_account_id: str) -> list[CurrencyBalance]:
        async with self._session_factory() as session:
            rows = await ExchangeWalletRepo(session).select_user_currency_balances(user_account_id)
        return [
            CurrencyBalance(
                currency=currency,
                balance=balance,
                usd_value=await self._price_service.get_usd_value(currency, balance),
                usd_price=await self._price_service.get_usd_price(currency),
            )
            for currency, balance in rows
        ]
