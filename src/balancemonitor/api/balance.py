import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from balancemonitor.api.deps import (
    get_balance_summary_service,
    get_current_user_id,
    get_sample_balance_service,
    is_pro_plan_user,
)
from balancemonitor.api.schemas.balance import BalanceSummaryResponse, CurrencyBalanceSummaryResponse
from balancemonitor.domain.models.balance import CurrencyBalanceSummary
from balancemonitor.wallet.sample_balances import SampleBalanceService
from balancemonitor.wallet.summary_service import BalanceSummaryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/balance", tags=["balance"])

UserIdDep = Annotated[str, Depends(get_current_user_id)]
ProPlanDep = Annotated[bool, Depends(is_pro_plan_user)]
SummaryServiceDep = Annotated[BalanceSummaryService, Depends(get_balance_summary_service)]
SampleServiceDep = Annotated[SampleBalanceService, Depends(get_sample_balance_service)]


def _response(summaries: list[CurrencyBalanceSummary], is_real: bool) -> BalanceSummaryResponse:
    return BalanceSummaryResponse(
        is_showing_real_balance=is_real,
        currency_balances=[CurrencyBalanceSummaryResponse.from_domain(s) for s in summaries],
    )


@router.get("/summary", response_model=BalanceSummaryResponse)
async def get_balance_summary(
    user_account_id: UserIdDep, is_pro_plan: ProPlanDep, service: SummaryServiceDep, samples: SampleServiceDep
) -> BalanceSummaryResponse:
    logger.info("User %s is requesting balance summary (pro plan: %s)", user_account_id, is_pro_plan)
    if not is_pro_plan:
        return _response(await samples.get_balance_summary(), is_real=False)
    return _response(await service.get_currency_balance_summary(user_account_id), is_real=True)


@router.post("/summary", response_model=BalanceSummaryResponse)
async def refresh_balance_summary(
    user_account_id: UserIdDep, is_pro_plan: ProPlanDep, service: SummaryServiceDep, samples: SampleServiceDep
) -> BalanceSummaryResponse:
    """Refresh blockchain and exchange balances, then return the fresh summary.

    Users outside the pro plan get the sample summary and nothing is refreshed.
    """
    logger.info("User %s is refreshing balance summary (pro plan: %s)", user_account_id, is_pro_plan)
    if not is_pro_plan:
        return _response(await samples.get_balance_summary(), is_real=False)
    return _response(await service.refresh_balance_summary(user_account_id), is_real=True)
