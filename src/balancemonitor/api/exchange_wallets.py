import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from balancemonitor.api.deps import (
    get_current_user_id,
    get_exchange_wallet_service,
    get_sample_balance_service,
    is_pro_plan_user,
)
from balancemonitor.api.schemas.balance import CurrencyBalanceResponse
from balancemonitor.api.schemas.exchange_wallets import ExchangeWalletBalancesResponse
from balancemonitor.wallet.exchange_service import ExchangeWalletService
from balancemonitor.wallet.sample_balances import SampleBalanceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exchange", tags=["exchange-wallets"])

UserIdDep = Annotated[str, Depends(get_current_user_id)]
ProPlanDep = Annotated[bool, Depends(is_pro_plan_user)]
ExchangeServiceDep = Annotated[ExchangeWalletService, Depends(get_exchange_wallet_service)]
SampleServiceDep = Annotated[SampleBalanceService, Depends(get_sample_balance_service)]


@router.get("/wallets", response_model=ExchangeWalletBalancesResponse)
async def get_exchange_wallets(
    user_account_id: UserIdDep, is_pro_plan: ProPlanDep, service: ExchangeServiceDep, samples: SampleServiceDep
) -> ExchangeWalletBalancesResponse:
    logger.info("User %s is requesting exchange wallets (pro plan: %s)", user_account_id, is_pro_plan)
    if not is_pro_plan:
        return ExchangeWalletBalancesResponse.from_domain(await samples.get_exchange_wallet_balances())
    return ExchangeWalletBalancesResponse.from_domain(await service.get_wallet_balances(user_account_id))


@router.get("/wallets/currency/balance", response_model=list[CurrencyBalanceResponse])
async def get_currency_balance(
    user_account_id: UserIdDep, is_pro_plan: ProPlanDep, service: ExchangeServiceDep
) -> list[CurrencyBalanceResponse]:
    if not is_pro_plan:
        return []
    balances = await service.get_currency_balances(user_account_id)
    return [CurrencyBalanceResponse.from_domain(b) for b in balances]


@router.post("/wallets/balance/refresh", response_model=ExchangeWalletBalancesResponse)
async def refresh_exchange_wallets(
    user_account_id: UserIdDep, is_pro_plan: ProPlanDep, service: ExchangeServiceDep, samples: SampleServiceDep
) -> ExchangeWalletBalancesResponse:
    logger.info("User %s is refreshing exchange wallets balance (pro plan: %s)", user_account_id, is_pro_plan)
    if not is_pro_plan:
        return ExchangeWalletBalancesResponse.from_domain(await samples.get_exchange_wallet_balances(refreshed=True))
    await service.refresh_wallet_balances(user_account_id)
    return ExchangeWalletBalancesResponse.from_domain(await service.get_wallet_balances(user_account_id))
