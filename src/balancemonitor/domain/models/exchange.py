"""Exchange balances as reported by the exchange mediator, and the same tree enriched with USD values."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _MediatorModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExchangeCurrencyBalance(_MediatorModel):
    currency_code: str
    amount_available: Decimal
    total_amount: Decimal
    amount_in_orders: Decimal


class ExchangeBalance(_MediatorModel):
    exchange_name: str
    error_message: Optional[str] = None
    currency_balances: list[ExchangeCurrencyBalance] = []


class ExchangeAccountBalances(_MediatorModel):
    """All exchanges connected to one exchange account of the user."""

    exchange_user_id: str
    exchange_user_name: str = ""
    exchange_balances: list[ExchangeBalance] = []


class ExchangeCurrencyBalanceWithValue(ExchangeCurrencyBalance):
    usd_value: Optional[Decimal] = None


class ExchangeBalanceWithValue(_MediatorModel):
    exchange_name: str
    error_message: Optional[str] = None
    currency_balances: list[ExchangeCurrencyBalanceWithValue] = []


class ExchangeAccountBalancesWithValue(_MediatorModel):
    exchange_user_id: str
    exchange_user_name: str = ""
    exchange_balances: list[ExchangeBalanceWithValue] = []


class ExchangeWalletBalances(_MediatorModel):
    refresh_time_millis: Optional[int] = None
    exchange_currency_balances: list[ExchangeAccountBalancesWithValue] = []
