import logging

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from balancemonitor.container import Container
from balancemonitor.infra.blockchain.base import WalletAddressValidatorRegistry
from balancemonitor.infra.oauth.token_checker import AccessTokenChecker, UserAccount
from balancemonitor.wallet.blockchain_service import BlockchainWalletService
from balancemonitor.wallet.currency_asset_service import CurrencyAssetService
from balancemonitor.wallet.exchange_service import ExchangeWalletService
from balancemonitor.wallet.sample_balances import SampleBalanceService
from balancemonitor.wallet.summary_service import BalanceSummaryService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


@inject
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token_checker: AccessTokenChecker = Depends(Provide[Container.access_token_checker]),
) -> UserAccount:
    """Resolve the bearer token of the request into the calling user's account."""
    if credentials is None:
        raise _unauthorized()
    try:
        account = await token_checker.check_token(credentials.credentials)
    except Exception:
        logger.exception("OAuth2 authentication went wrong")
        raise _unauthorized()
    if account is None:
        raise _unauthorized()
    return account


async def get_current_user_id(account: UserAccount = Depends(get_current_user)) -> str:
    return account.user_account_id


async def is_pro_plan_user(account: UserAccount = Depends(get_current_user)) -> bool:
    return account.is_pro_plan


@inject
def get_session_factory(
    session_factory: async_sessionmaker[AsyncSession] = Depends(Provide[Container.session_factory]),
) -> async_sessionmaker[AsyncSession]:
    return session_factory


@inject
def get_blockchain_wallet_service(
    service: BlockchainWalletService = Depends(Provide[Container.blockchain_wallet_service]),
) -> BlockchainWalletService:
    return service


@inject
def get_exchange_wallet_service(
    service: ExchangeWalletService = Depends(Provide[Container.exchange_wallet_service]),
) -> ExchangeWalletService:
    return service


@inject
def get_currency_asset_service(
    service: CurrencyAssetService = Depends(Provide[Container.currency_asset_service]),
) -> CurrencyAssetService:
    return service


@inject
def get_balance_summary_service(
    service: BalanceSummaryService = Depends(Provide[Container.balance_summary_service]),
) -> BalanceSummaryService:
    return service


@inject
def get_address_validators(
    validators: WalletAddressValidatorRegistry = Depends(Provide[Container.address_validators]),
) -> WalletAddressValidatorRegistry:
    return validators


@inject
def get_sample_balance_service(
    service: SampleBalanceService = Depends(Provide[Container.sample_balance_service]),
) -> SampleBalanceService:
    return service
