import uuid
from decimal import Decimal
from typing import Optional

from balancemonitor.api.schemas.common import ApiModel, DecimalStr, ValueInOtherCurrency, usd_map
from balancemonitor.domain.models.balance import CurrencyAssetWithValue, CurrencyBalance, NewCurrencyAsset
from balancemonitor.infra.blockchain.explorer import get_blockchain_explorer_url


class CurrencyAssetCreate(ApiModel):
    currency: str
    balance: Decimal
    description: Optional[str] = None
    wallet_address: Optional[str] = None

    def to_domain(self) -> NewCurrencyAsset:
        return NewCurrencyAsset(
            currency=self.currency,
            balance=self.balance,
            description=self.description,
            wallet_address=self.wallet_address,
        )


class CurrencyAssetUpdate(ApiModel):
    currency: str
    balance: Decimal
    description: Optional[str] = None
    wallet_address: Optional[str] = None


class CurrencyAssetResponse(ApiModel):
    id: uuid.UUID
    currency: str
    description: Optional[str] = None
    wallet_address: Optional[str] = None
    block_chain_explorer_url: Optional[str] = None
    balance: DecimalStr
    value_in_other_currency: ValueInOtherCurrency

    @classmethod
    def from_domain(cls, asset: CurrencyAssetWithValue) -> "CurrencyAssetResponse":
        return cls(
            id=asset.id,
            currency=asset.currency,
            description=asset.description,
            wallet_address=asset.wallet_address,
            block_chain_explorer_url=get_blockchain_explorer_url(asset.currency, asset.wallet_address),
            balance=asset.balance,
            value_in_other_currency=usd_map(asset.usd_value),
        )


class CurrencyAssetSummaryEntry(ApiModel):
    currency: str
    balance: DecimalStr
    value_in_other_currency: ValueInOtherCurrency
    price_in_other_currency: ValueInOtherCurrency

    @classmethod
    def from_domain(cls, summary: CurrencyBalance) -> "CurrencyAssetSummaryEntry":
        return cls(
            currency=summary.currency,
            balance=summary.balance,
            value_in_other_currency=usd_map(summary.usd_value),
            price_in_other_currency=usd_map(summary.usd_price),
        )


class CurrencyAssetsResponse(ApiModel):
    user_currency_assets: list[CurrencyAssetResponse]
    user_currency_assets_summary: list[CurrencyAssetSummaryEntry]
