"""Last known prices, saved after every scheduled refresh and loaded into the price cache at startup."""

from decimal import Decimal

from sqlalchemy import BigInteger, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from balancemonitor.db.session import Base, UUIDPrimaryKey


class CurrencyPriceSnapshot(UUIDPrimaryKey, Base):
    """Latest price of one currency pair. Keyed by (base_currency, counter_currency)."""

    __tablename__ = "currency_price"
    __table_args__ = (UniqueConstraint("base_currency", "counter_currency"),)

    base_currency: Mapped[str] = mapped_column(String(20))
    counter_currency: Mapped[str] = mapped_column(String(20))
    price: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    as_of_millis: Mapped[int] = mapped_column(BigInteger)
