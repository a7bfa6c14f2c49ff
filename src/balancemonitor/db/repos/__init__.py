from balancemonitor.db.repos.blockchain_wallet_repo import BlockchainWalletRepo
from balancemonitor.db.repos.currency_asset_repo import CurrencyAssetRepo
from balancemonitor.db.repos.currency_price_repo import CurrencyPriceRepo
from balancemonitor.db.repos.currency_repo import CurrencyRepo
from balancemonitor.db.repos.exchange_wallet_repo import ExchangeWalletLastRefreshRepo, ExchangeWalletRepo

__all__ = [
    "BlockchainWalletRepo",
    "CurrencyAssetRepo",
    "CurrencyPriceRepo",
    "CurrencyRepo",
    "ExchangeWalletLastRefreshRepo",
    "ExchangeWalletRepo",
]
