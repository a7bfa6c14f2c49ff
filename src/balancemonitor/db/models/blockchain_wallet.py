from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from balancemonitor.db.session import Base, UUIDPrimaryKey


class BlockchainWallet(UUIDPrimaryKey, Base):
    """On-chain address tracked by a user. A null balance means it was never refreshed."""

    __tablename__ = "user_blockchain_wallet"
    __table_args__ = (
        UniqueConstraint("user_account_id", "wallet_address", name="uq_user_blockchain_wallet_user_address"),
    )

    user_account_id: Mapped[str] = mapped_column(String(255), index=True)
    wallet_address: Mapped[str] = mapped_column(String(255))
    currency: Mapped[str] = mapped_column(String(20), index=True)
    balance: Mapped[Optional[Decimal]] = mapped_column(Numeric(38, 18), default=None)
    description: Mapped[Optional[str]] = mapped_column(String(255), default=None)
