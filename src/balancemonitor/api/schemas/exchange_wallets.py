from typing import Optional

from balancemonitor.api.schemas.common import ApiModel, DecimalStr, ValueInOtherCurrency, usd_map
from balancemonitor.domain.models.exchange import ExchangeWalletBalances


class ExchangeCurrencyBalanceResponse(ApiModel):
    currency_code: str
    amount_available: DecimalStr
    total_amount: DecimalStr
    amount_in_orders: DecimalStr
    value_in_other_currency: ValueInOtherCurrency


class ExchangeBalanceResponse(ApiModel):
    exchange_name: str
    error_message: Optional[str] = None
    currency_balances: list[ExchangeCurrencyBalanceResponse]


class ExchangeAccountBalancesResponse(ApiModel):
    exchange_user_id: str
    exchange_user_name: str = ""
    exchange_balances: list[ExchangeBalanceResponse]


class ExchangeWalletBalancesResponse(ApiModel):
    refresh_time_millis: Optional[int] = None
    exchange_currency_balances: list[ExchangeAccountBalancesResponse]

    @classmethod
    def from_domain(cls, balances: ExchangeWalletBalances) -> "ExchangeWalletBalancesResponse":
        return cls(
            refresh_time_millis=balances.refresh_time_millis,
            exchange_currency_balances=[
                ExchangeAccountBalancesResponse(
                    exchange_user_id=account.exchange_user_id,
                    exchange_user_name=account.exchange_user_name,
                    exchange_balances=[
                        ExchangeBalanceResponse(
                            exchange_name=exchange.exchange_name,
                            error_message=exchange.error_message,
                            currency_balances=[
                                ExchangeCurrencyBalanceResponse(
                                    currency_code=b.currency_code,
                                    amount_available=b.amount_available,
                                    total_amount=b.total_amount,
                                    amount_in_orders=b.amount_in_orders,
                                    value_in_other_currency=usd_map(b.usd_value),
                                )
                                for b in exchange.currency_balances
                            ],
                        )
                        for exchange in account.exchange_balances
                    ],
                )
                for account in balances.exchange_currency_balances
            ],
        )
