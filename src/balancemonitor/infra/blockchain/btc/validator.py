import re

from balancemonitor.infra.blockchain.base import WalletAddressValidator

# Legacy P2PKH/P2SH (base58) or bech32 segwit
BTC_ADDRESS_PATTERN = re.compile(r"[13][a-km-zA-HJ-NP-Z1-9]{26,33}|bc1[a-z0-9]{39,59}")


class BtcWalletAddressValidator(WalletAddressValidator):
    def is_valid(self, wallet_address: str) -> bool:
        return BTC_ADDRESS_PATTERN.fullmatch(wallet_address) is not None
