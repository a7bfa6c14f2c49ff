from typing import Optional

from balancemonitor.api.schemas.common import ApiModel, DecimalStr, ValueInOtherCurrency, usd_map
from balancemonitor.domain.models.balance import (
    BlockchainWalletCurrencySummary,
    CurrencyAssetWithValue,
    CurrencyBalance,
    CurrencyBalanceSummary,
    ExchangeCurrencySummary,
)


class ExchangeCurrencySummaryResponse(ApiModel):
    exchange_name: str
    balance: DecimalStr
    value_in_other_currency: ValueInOtherCurrency

    @classmethod
    def from_domain(cls, summary: ExchangeCurrencySummary) -> "ExchangeCurrencySummaryResponse":
        return cls(
            exchange_name=summary.exchange_name,
            balance=summary.balance,
            value_in_other_currency=usd_map(summary.usd_value),
        )


class BlockchainWalletCurrencySummaryResponse(ApiModel):
    wallet_address: str
    balance: Optional[DecimalStr] = None
    value_in_other_currency: ValueInOtherCurrency

    @classmethod
    def from_domain(cls, summary: BlockchainWalletCurrencySummary) -> "BlockchainWalletCurrencySummaryResponse":
        return cls(
            wallet_address=summary.wallet_address,
            balance=summary.balance,
            value_in_other_currency=usd_map(summary.usd_value),
        )


class CurrencyAssetSummaryResponse(ApiModel):
    balance: DecimalStr
    description: Optional[str] = None
    value_in_other_currency: ValueInOtherCurrency

    @classmethod
    def from_domain(cls, asset: CurrencyAssetWithValue) -> "CurrencyAssetSummaryResponse":
        return cls(
            balance=asset.balance,
            description=asset.description,
            value_in_other_currency=usd_map(asset.usd_value),
        )


class CurrencyBalanceSummaryResponse(ApiModel):
    currency: str
    balance: Optional[DecimalStr] = None
    value_in_other_currency: ValueInOtherCurrency
    price_in_other_currency: ValueInOtherCurrency
    exchanges: list[ExchangeCurrencySummaryResponse]
    wallets: list[BlockchainWalletCurrencySummaryResponse]
    currency_assets: list[CurrencyAssetSummaryResponse]

    @classmethod
    def from_domain(cls, summary: CurrencyBalanceSummary) -> "CurrencyBalanceSummaryResponse":
        return cls(
            currency=summary.currency,
            balance=summary.balance,
            value_in_other_currency=usd_map(summary.usd_value),
            price_in_other_currency=usd_map(summary.usd_price),
            exchanges=[ExchangeCurrencySummaryResponse.from_domain(e) for e in summary.exchanges],
            wallets=[BlockchainWalletCurrencySummaryResponse.from_domain(w) for w in summary.wallets],
            currency_assets=[CurrencyAssetSummaryResponse.from_domain(a) for a in summary.currency_assets],
        )


class BalanceSummaryResponse(ApiModel):
    is_showing_real_balance: bool = True
    currency_balances: list[CurrencyBalanceSummaryResponse]


class CurrencyBalanceResponse(ApiModel):
    """Per-currency total within one source (blockchain or exchange wallets)."""

    currency: str
    balance: Optional[DecimalStr] = None
    usd_balance: Optional[DecimalStr] = None
    usd_price: Optional[DecimalStr] = None

    @classmethod
    def from_domain(cls, balance: CurrencyBalance) -> "CurrencyBalanceResponse":
        return cls(
            currency=balance.currency,
            balance=balance.balance,
            usd_balance=balance.usd_value,
            usd_price=balance.usd_price,
        )
