import uuid
from typing import Optional

from pydantic import field_validator

from balancemonitor.api.schemas.common import ApiModel, DecimalStr
from balancemonitor.domain.models.balance import BlockchainWalletWithValue


class BlockchainWalletCreate(ApiModel):
    wallet_address: str
    currency: str
    description: Optional[str] = None

    @field_validator("wallet_address", "currency")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()


class BlockchainWalletUpdate(BlockchainWalletCreate):
    id: uuid.UUID


class BlockchainWalletResponse(ApiModel):
    id: uuid.UUID
    wallet_address: str
    currency: str
    description: Optional[str] = None
    balance: Optional[DecimalStr] = None
    usd_balance: Optional[DecimalStr] = None

    @classmethod
    def from_domain(cls, wallet: BlockchainWalletWithValue) -> "BlockchainWalletResponse":
        return cls(
            id=wallet.id,
            wallet_address=wallet.wallet_address,
            currency=wallet.currency,
            description=wallet.description,
            balance=wallet.balance,
            usd_balance=wallet.usd_value,
        )


class CreateBlockchainWalletsError(ApiModel):
    duplicated_addresses: list[str] = []
    invalid_addresses: list[str] = []


class UpdateBlockchainWalletError(ApiModel):
    is_address_duplicated: bool = False
    is_address_invalid: bool = False
    is_id_invalid: bool = False
