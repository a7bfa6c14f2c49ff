from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from balancemonitor.db.session import Base, UUIDPrimaryKey


class UserCurrencyAsset(UUIDPrimaryKey, Base):
    """Manually entered balance. Never refreshed automatically."""

    __tablename__ = "user_currency_asset"

    user_account_id: Mapped[str] = mapped_column(String(255), index=True)
    currency: Mapped[str] = mapped_column(String(20), index=True)
    balance: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    description: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    wallet_address: Mapped[Optional[str]] = mapped_column(String(255), default=None)
