from apscheduler.schedulers.asyncio import AsyncIOScheduler
from dependency_injector import containers, providers

from balancemonitor.config import Settings
from balancemonitor.db.session import build_engine, build_session_factory
from balancemonitor.infra.blockchain.base import BlockchainBalanceRegistry, WalletAddressValidatorRegistry
from balancemonitor.infra.blockchain.btc.client import BtcBalanceClient
from balancemonitor.infra.blockchain.btc.validator import BtcWalletAddressValidator
from balancemonitor.infra.blockchain.eth.balance_client import EthBalanceClient
from balancemonitor.infra.blockchain.eth.rpc_client import EthRpcClient
from balancemonitor.infra.blockchain.eth.validator import EthWalletAddressValidator
from balancemonitor.infra.exchange.mediator_client import ExchangeMediatorClient
from balancemonitor.infra.http.rate_limited_client import RateLimitedClient
from balancemonitor.infra.oauth.client_credentials import ClientCredentialsAuth
from balancemonitor.infra.oauth.token_checker import AccessTokenChecker
from balancemonitor.infra.price.caching import CachingPriceService
from balancemonitor.infra.price.rest_source import RestPriceSource
from balancemonitor.wallet.blockchain_service import BlockchainWalletService
from balancemonitor.wallet.currency_asset_service import CurrencyAssetService
from balancemonitor.wallet.exchange_service import ExchangeWalletService
from balancemonitor.wallet.sample_balances import SampleBalanceService
from balancemonitor.wallet.summary_service import BalanceSummaryService
from balancemonitor.workers.price_refresh import PriceRefreshScheduler


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["balancemonitor.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    # Outbound HTTP: plain for public nodes and the auth server, token-authenticated for internal services.
    client_credentials_auth = providers.Singleton(
        ClientCredentialsAuth,
        oauth2_api_url=settings.provided.oauth2_api_url,
        client_id=settings.provided.oauth2_client_id,
        client_secret=settings.provided.oauth2_client_secret,
        timeout=settings.provided.http_timeout_seconds,
    )

    http_client = providers.Singleton(
        RateLimitedClient,
        timeout=settings.provided.http_timeout_seconds,
    )

    service_http_client = providers.Singleton(
        RateLimitedClient,
        timeout=settings.provided.http_timeout_seconds,
        auth=client_credentials_auth,
    )

    exchange_mediator_http_client = providers.Singleton(
        RateLimitedClient,
        timeout=settings.provided.exchange_mediator_timeout_seconds,
        auth=client_credentials_auth,
    )

    access_token_checker = providers.Singleton(
        AccessTokenChecker,
        oauth2_api_url=settings.provided.oauth2_api_url,
        client_id=settings.provided.oauth2_client_id,
        client_secret=settings.provided.oauth2_client_secret,
        http_client=http_client,
    )

    # Prices
    price_source = providers.Singleton(
        RestPriceSource,
        price_api_url=settings.provided.price_api_url,
        http_client=service_http_client,
    )

    price_service = providers.Singleton(
        CachingPriceService,
        source=price_source,
        ttl_seconds=settings.provided.price_cache_ttl_seconds,
        failure_ttl_seconds=settings.provided.price_cache_failure_ttl_seconds,
        refresh_after_seconds=settings.provided.price_cache_refresh_after_seconds,
        max_size=settings.provided.price_cache_max_size,
    )

    # Blockchains
    eth_rpc_client = providers.Singleton(
        EthRpcClient,
        node_url=settings.provided.eth_node_url,
        http_client=http_client,
    )

    balance_registry = providers.Singleton(
        BlockchainBalanceRegistry,
        clients=providers.Dict(
            ETH=providers.Singleton(EthBalanceClient, rpc=eth_rpc_client),
            BTC=providers.Singleton(BtcBalanceClient, http_client=http_client, api_url=settings.provided.btc_api_url),
        ),
    )

    address_validators = providers.Singleton(
        WalletAddressValidatorRegistry,
        validators=providers.Dict(
            ETH=providers.Singleton(EthWalletAddressValidator),
            BTC=providers.Singleton(BtcWalletAddressValidator),
        ),
    )

    exchange_mediator_client = providers.Singleton(
        ExchangeMediatorClient,
        exchange_mediator_api_url=settings.provided.exchange_mediator_api_url,
        http_client=exchange_mediator_http_client,
    )

    # Services
    blockchain_wallet_service = providers.Singleton(
        BlockchainWalletService,
        session_factory=session_factory,
        balance_registry=balance_registry,
        price_service=price_service,
    )

    exchange_wallet_service = providers.Singleton(
        ExchangeWalletService,
        session_factory=session_factory,
        mediator_client=exchange_mediator_client,
        price_service=price_service,
    )

    currency_asset_service = providers.Singleton(
        CurrencyAssetService,
        session_factory=session_factory,
        price_service=price_service,
    )

    balance_summary_service = providers.Singleton(
        BalanceSummaryService,
        session_factory=session_factory,
        blockchain_wallet_service=blockchain_wallet_service,
        exchange_wallet_service=exchange_wallet_service,
        currency_asset_service=currency_asset_service,
        price_service=price_service,
    )

    sample_balance_service = providers.Singleton(SampleBalanceService, price_service=price_service)

    scheduler = providers.Singleton(AsyncIOScheduler)

    price_refresh_scheduler = providers.Singleton(
        PriceRefreshScheduler,
        session_factory=session_factory,
        price_service=price_service,
        scheduler=scheduler,
        interval_seconds=settings.provided.price_refresh_interval_seconds,
    )
