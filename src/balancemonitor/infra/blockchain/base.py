"""Abstract bases for per-currency blockchain balance clients and address validators, and their registries."""

from abc import ABC, abstractmethod
from decimal import Decimal

from balancemonitor.exceptions import UnsupportedCurrencyError


class BlockchainBalanceClient(ABC):
    """Strategy interface for reading the on-chain balance of an address."""

    @abstractmethod
    async def get_balance(self, wallet_address: str) -> Decimal | None:
        """Balance in whole coins, or None when the node could not be asked."""


class WalletAddressValidator(ABC):
    @abstractmethod
    def is_valid(self, wallet_address: str) -> bool: ...


class BlockchainBalanceRegistry:
    def __init__(self, clients: dict[str, BlockchainBalanceClient]) -> None:
        self._clients = {currency.upper(): client for currency, client in clients.items()}

    def supports(self, currency: str) -> bool:
        return currency.upper() in self._clients

    async def get_balance(self, currency: str, wallet_address: str) -> Decimal | None:
        client = self._clients.get(currency.upper())
        if client is None:
            raise UnsupportedCurrencyError(currency)
        return await client.get_balance(wallet_address)


class WalletAddressValidatorRegistry:
    def __init__(self, validators: dict[str, WalletAddressValidator]) -> None:
        self._validators = {currency.upper(): validator for currency, validator in validators.items()}

    def is_wallet_address_valid(self, currency: str, wallet_address: str) -> bool:
        validator = self._validators.get(currency.upper())
        if validator is None:
            return False
        return validator.is_valid(wallet_address)
