import logging
from decimal import Decimal

from balancemonitor.infra.blockchain.base import BlockchainBalanceClient
from balancemonitor.infra.blockchain.eth.rpc_client import EthRpcClient

logger = logging.getLogger(__name__)

WEI_PER_ETHER = Decimal(10) ** 18


class EthBalanceClient(BlockchainBalanceClient):
    def __init__(self, rpc: EthRpcClient) -> None:
        self._rpc = rpc

    async def get_balance(self, wallet_address: str) -> Decimal | None:
        try:
            wei = await self._rpc.get_balance_wei(wallet_address)
        except Exception:
            logger.exception("Could not get ETH balance of %s", wallet_address)
            return None
        return Decimal(wei) / WEI_PER_ETHER
