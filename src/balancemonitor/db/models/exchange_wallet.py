from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from balancemonitor.db.session import Base, UUIDPrimaryKey


class ExchangeWallet(UUIDPrimaryKey, Base):
    """Balance snapshot of one currency on one exchange account. Replaced wholesale on every refresh."""

    __tablename__ = "user_exchange_wallet"

    user_account_id: Mapped[str] = mapped_column(String(255), index=True)
    exchange: Mapped[str] = mapped_column(String(50))
    exchange_user_id: Mapped[str] = mapped_column(String(255))
    currency: Mapped[str] = mapped_column(String(20), index=True)
    balance: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    amount_in_orders: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    amount_available: Mapped[Decimal] = mapped_column(Numeric(38, 18))


class ExchangeWalletLastRefresh(UUIDPrimaryKey, Base):
    """Outcome of the last refresh for one (exchange account, exchange) pair."""

    __tablename__ = "user_exchange_wallet_last_refresh"

    user_account_id: Mapped[str] = mapped_column(String(255), index=True)
    exchange: Mapped[str] = mapped_column(String(50))
    exchange_user_id: Mapped[str] = mapped_column(String(255))
    exchange_user_name: Mapped[str] = mapped_column(String(255), default="")
    error_message: Mapped[Optional[str]] = mapped_column(Text, default=None)
    inserted_at_millis: Mapped[int] = mapped_column(BigInteger)
