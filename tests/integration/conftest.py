from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from balancemonitor.api import deps
from balancemonitor.api.main import app
from balancemonitor.infra.blockchain.base import BlockchainBalanceRegistry, WalletAddressValidatorRegistry
from balancemonitor.infra.blockchain.btc.validator import BtcWalletAddressValidator
from balancemonitor.infra.blockchain.eth.validator import EthWalletAddressValidator
from balancemonitor.wallet.blockchain_service import BlockchainWalletService
from balancemonitor.wallet.currency_asset_service import CurrencyAssetService
from balancemonitor.wallet.exchange_service import ExchangeWalletService
from balancemonitor.wallet.sample_balances import SampleBalanceService
from balancemonitor.wallet.summary_service import BalanceSummaryService

USER_ID = "user-1"


@pytest.fixture()
def eth_client():
    client = AsyncMock()
    client.get_balance.return_value = Decimal("1.5")
    return client


@pytest.fixture()
def mediator():
    client = AsyncMock()
    client.get_user_balances.return_value = []
    return client


@pytest.fixture()
def services(session_factory, price_service, eth_client, mediator):
    blockchain = BlockchainWalletService(
        session_factory, BlockchainBalanceRegistry({"ETH": eth_client}), price_service
    )
    exchange = ExchangeWalletService(session_factory, mediator, price_service, now_millis=lambda: 1700000000000)
    assets = CurrencyAssetService(session_factory, price_service)
    summary = BalanceSummaryService(session_factory, blockchain, exchange, assets, price_service)
    return blockchain, exchange, assets, summary


@pytest.fixture()
async def client(session_factory, services, price_service):
    blockchain, exchange, assets, summary = services
    samples = SampleBalanceService(price_service, now_millis=lambda: 1700000000000)
    validators = WalletAddressValidatorRegistry(
        {"ETH": EthWalletAddressValidator(), "BTC": BtcWalletAddressValidator()}
    )

    app.dependency_overrides[deps.get_current_user_id] = lambda: USER_ID
    app.dependency_overrides[deps.is_pro_plan_user] = lambda: True
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_blockchain_wallet_service] = lambda: blockchain
    app.dependency_overrides[deps.get_exchange_wallet_service] = lambda: exchange
    app.dependency_overrides[deps.get_currency_asset_service] = lambda: assets
    app.dependency_overrides[deps.get_balance_summary_service] = lambda: summary
    app.dependency_overrides[deps.get_address_validators] = lambda: validators
    app.dependency_overrides[deps.get_sample_balance_service] = lambda: samples
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def free_plan(client):
    app.dependency_overrides[deps.is_pro_plan_user] = lambda: False
    return client
