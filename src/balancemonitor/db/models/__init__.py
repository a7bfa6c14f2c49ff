from balancemonitor.db.models.blockchain_wallet import BlockchainWallet
from balancemonitor.db.models.currency_asset import UserCurrencyAsset
from balancemonitor.db.models.currency_price import CurrencyPriceSnapshot
from balancemonitor.db.models.exchange_wallet import ExchangeWallet, ExchangeWalletLastRefresh

__all__ = [
    "BlockchainWallet",
    "CurrencyPriceSnapshot",
    "ExchangeWallet",
    "ExchangeWalletLastRefresh",
    "UserCurrencyAsset",
]
