import re

from balancemonitor.infra.blockchain.base import WalletAddressValidator

ETH_ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


class EthWalletAddressValidator(WalletAddressValidator):
    def is_valid(self, wallet_address: str) -> bool:
        return ETH_ADDRESS_PATTERN.fullmatch(wallet_address) is not None
