"""Sample holdings shown to users outside the pro plan, valued with live prices."""

import uuid
from decimal import Decimal
from typing import Callable

from balancemonitor.domain.models.balance import (
    BlockchainWalletCurrencySummary,
    CurrencyAssetWithValue,
    CurrencyBalance,
    CurrencyBalanceSummary,
    ExchangeCurrencySummary,
)
from balancemonitor.domain.models.exchange import (
    ExchangeAccountBalancesWithValue,
    ExchangeBalanceWithValue,
    ExchangeCurrencyBalanceWithValue,
    ExchangeWalletBalances,
)
from balancemonitor.infra.price.caching import CachingPriceService
from balancemonitor.infra.price.rest_source import current_time_millis

SAMPLE_EXCHANGE = "binance"
SAMPLE_BTC_WALLET = "bc1qmsyd37rsfc9u29cun77rfc3m7gs72u03m8u7v8aadxaql7346r3sx8p9tr"

SAMPLE_EXCHANGE_BTC = Decimal("0.49")
SAMPLE_WALLET_BTC = Decimal("0.157")
SAMPLE_ASSET_ETH = Decimal("1.29818")


class SampleBalanceService:
    def __init__(
        self,
        price_service: CachingPriceService,
        now_millis: Callable[[], int] = current_time_millis,
    ) -> None:
        self._price_service = price_service
        self._now_millis = now_millis

    async def get_balance_summary(self) -> list[CurrencyBalanceSummary]:
        usd_value = self._price_service.get_usd_value
        btc_balance = SAMPLE_EXCHANGE_BTC + SAMPLE_WALLET_BTC
        return [
            CurrencyBalanceSummary(
                currency="BTC",
                balance=btc_balance,
                usd_value=await usd_value("BTC", btc_balance),
                usd_price=await self._price_service.get_usd_price("BTC"),
                exchanges=[
                    ExchangeCurrencySummary(
                        exchange_name=SAMPLE_EXCHANGE,
                        balance=SAMPLE_EXCHANGE_BTC,
                        usd_value=await usd_value("BTC", SAMPLE_EXCHANGE_BTC),
                    )
                ],
                wallets=[
                    BlockchainWalletCurrencySummary(
                        wallet_address=SAMPLE_BTC_WALLET,
                        balance=SAMPLE_WALLET_BTC,
                        usd_value=await usd_value("BTC", SAMPLE_WALLET_BTC),
                    )
                ],
            ),
            CurrencyBalanceSummary(
                currency="ETH",
                balance=SAMPLE_ASSET_ETH,
                usd_value=await usd_value("ETH", SAMPLE_ASSET_ETH),
                usd_price=await self._price_service.get_usd_price("ETH"),
                currency_assets=[await self._eth_asset()],
            ),
        ]

    async def get_exchange_wallet_balances(self, refreshed: bool = False) -> ExchangeWalletBalances:
        """Sample exchange wallets. A refresh stamps the current time like a real one."""
        in_orders = Decimal("0.09")
        return ExchangeWalletBalances(
            refresh_time_millis=self._now_millis() if refreshed else None,
            exchange_currency_balances=[
                ExchangeAccountBalancesWithValue(
                    exchange_user_id="sample",
                    exchange_user_name="Sample account",
                    exchange_balances=[
                        ExchangeBalanceWithValue(
                            exchange_name=SAMPLE_EXCHANGE,
                            currency_balances=[
                                ExchangeCurrencyBalanceWithValue(
                                    currency_code="BTC",
                                    amount_available=SAMPLE_EXCHANGE_BTC - in_orders,
                                    total_amount=SAMPLE_EXCHANGE_BTC,
                                    amount_in_orders=in_orders,
                                    usd_value=await self._price_service.get_usd_value("BTC", SAMPLE_EXCHANGE_BTC),
                                )
                            ],
                        )
                    ],
                )
            ],
        )

    async def get_currency_assets(self) -> tuple[list[CurrencyAssetWithValue], list[CurrencyBalance]]:
        usd_value = self._price_service.get_usd_value
        btc_balance = SAMPLE_EXCHANGE_BTC + SAMPLE_WALLET_BTC
        assets = [
            CurrencyAssetWithValue(
                id=uuid.uuid4(),
                currency="BTC",
                balance=SAMPLE_EXCHANGE_BTC,
                description="from binance",
                wallet_address=SAMPLE_BTC_WALLET,
                usd_value=await usd_value("BTC", SAMPLE_EXCHANGE_BTC),
            ),
            CurrencyAssetWithValue(
                id=uuid.uuid4(),
                currency="BTC",
                balance=SAMPLE_WALLET_BTC,
                description="at binance",
                usd_value=await usd_value("BTC", SAMPLE_WALLET_BTC),
            ),
            await self._eth_asset(),
        ]
        summary = [
            CurrencyBalance(
                currency="BTC",
                balance=btc_balance,
                usd_value=await usd_value("BTC", btc_balance),
                usd_price=await self._price_service.get_usd_price("BTC"),
            ),
            CurrencyBalance(
                currency="ETH",
                balance=SAMPLE_ASSET_ETH,
                usd_value=await usd_value("ETH", SAMPLE_ASSET_ETH),
                usd_price=await self._price_service.get_usd_price("ETH"),
            ),
        ]
        return assets, summary

    async def _eth_asset(self) -> CurrencyAssetWithValue:
        return CurrencyAssetWithValue(
            id=uuid.uuid4(),
            currency="ETH",
            balance=SAMPLE_ASSET_ETH,
            description="deployed at https://app.yield.app",
            usd_value=await self._price_service.get_usd_value("ETH", SAMPLE_ASSET_ETH),
        )
