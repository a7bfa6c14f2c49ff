from balancemonitor.domain.models.balance import (
    BlockchainWalletCurrencySummary,
    BlockchainWalletWithValue,
    CurrencyAssetWithValue,
    CurrencyBalance,
    CurrencyBalanceSummary,
    ExchangeCurrencySummary,
    NewCurrencyAsset,
    WalletAddResult,
    WalletUpdate,
    WalletUpdateResult,
)
from balancemonitor.domain.models.exchange import (
    ExchangeAccountBalances,
    ExchangeAccountBalancesWithValue,
    ExchangeBalance,
    ExchangeBalanceWithValue,
    ExchangeCurrencyBalance,
    ExchangeCurrencyBalanceWithValue,
    ExchangeWalletBalances,
)
from balancemonitor.domain.models.price import CurrencyPrice

__all__ = [
    "BlockchainWalletCurrencySummary",
    "BlockchainWalletWithValue",
    "CurrencyAssetWithValue",
    "CurrencyBalance",
    "CurrencyBalanceSummary",
    "CurrencyPrice",
    "ExchangeAccountBalances",
    "ExchangeAccountBalancesWithValue",
    "ExchangeBalance",
    "ExchangeBalanceWithValue",
    "ExchangeCurrencyBalance",
    "ExchangeCurrencyBalanceWithValue",
    "ExchangeCurrencySummary",
    "ExchangeWalletBalances",
    "NewCurrencyAsset",
    "WalletAddResult",
    "WalletUpdate",
    "WalletUpdateResult",
]
