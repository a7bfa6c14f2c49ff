"""Price types shared by the price source and the price cache."""

from decimal import Decimal

from pydantic import BaseModel


class CurrencyPrice(BaseModel):
    """Rate base_currency -> counter_currency at as_of_millis."""

    price: Decimal
    base_currency: str
    counter_currency: str
    as_of_millis: int
