"""Domain types for wallet mutations and the per-currency balance summary."""

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class WalletAddResult(BaseModel):
    user_already_has_wallet_with_this_address: bool


class WalletUpdate(BaseModel):
    id: uuid.UUID
    wallet_address: str
    currency: str
    description: Optional[str] = None


class WalletUpdateResult(BaseModel):
    user_has_no_wallet_with_given_id: bool = False
    user_already_has_wallet_with_this_address: bool = False

    @property
    def is_successful(self) -> bool:
        return not self.user_has_no_wallet_with_given_id and not self.user_already_has_wallet_with_this_address


class CurrencyBalance(BaseModel):
    """Sum of balances for one currency within a single source."""

    currency: str
    balance: Optional[Decimal] = None
    usd_value: Optional[Decimal] = None
    usd_price: Optional[Decimal] = None


class CurrencyAssetWithValue(BaseModel):
    id: uuid.UUID
    currency: str
    balance: Decimal
    description: Optional[str] = None
    wallet_address: Optional[str] = None
    usd_value: Optional[Decimal] = None


class ExchangeCurrencySummary(BaseModel):
    exchange_name: str
    balance: Decimal
    usd_value: Optional[Decimal] = None


class BlockchainWalletCurrencySummary(BaseModel):
    wallet_address: str
    balance: Optional[Decimal] = None  # None = wallet never refreshed
    usd_value: Optional[Decimal] = None


class CurrencyBalanceSummary(BaseModel):
    """Everything a user holds in one currency, across all sources."""

    currency: str
    balance: Optional[Decimal] = None
    usd_value: Optional[Decimal] = None
    usd_price: Optional[Decimal] = None
    exchanges: list[ExchangeCurrencySummary] = []
    wallets: list[BlockchainWalletCurrencySummary] = []
    currency_assets: list[CurrencyAssetWithValue] = []


class BlockchainWalletWithValue(BaseModel):
    id: uuid.UUID
    wallet_address: str
    currency: str
    description: Optional[str] = None
    balance: Optional[Decimal] = None
    usd_value: Optional[Decimal] = None


class NewCurrencyAsset(BaseModel):
    currency: str
    balance: Decimal
    description: Optional[str] = None
    wallet_address: Optional[str] = None
