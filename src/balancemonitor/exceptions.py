class BalanceMonitorError(Exception):
    """Base class for errors raised by the balance monitor."""


class ExternalServiceError(BalanceMonitorError):
    """A collaborator (node, price API, exchange mediator) returned an error or garbage."""


class PriceResponseError(ExternalServiceError):
    def __init__(self, message: str, reason_tag: str) -> None:
        super().__init__(message)
        self.reason_tag = reason_tag


class UnsupportedCurrencyError(BalanceMonitorError):
    """No blockchain client is registered for the currency. Deployment problem, not a transient one."""

    def __init__(self, currency: str) -> None:
        super().__init__(f"No blockchain balance client registered for currency {currency}")
        self.currency = currency
