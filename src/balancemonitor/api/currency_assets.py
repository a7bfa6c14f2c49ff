import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from balancemonitor.api.deps import get_currency_asset_service, get_current_user_id, get_sample_balance_service
from balancemonitor.api.schemas.currency_assets import (
    CurrencyAssetCreate,
    CurrencyAssetResponse,
    CurrencyAssetsResponse,
    CurrencyAssetSummaryEntry,
    CurrencyAssetUpdate,
)
from balancemonitor.wallet.currency_asset_service import CurrencyAssetService
from balancemonitor.wallet.sample_balances import SampleBalanceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user-currency-assets", tags=["currency-assets"])

UserIdDep = Annotated[str, Depends(get_current_user_id)]
AssetServiceDep = Annotated[CurrencyAssetService, Depends(get_currency_asset_service)]
SampleServiceDep = Annotated[SampleBalanceService, Depends(get_sample_balance_service)]


@router.get("", response_model=CurrencyAssetsResponse)
async def list_currency_assets(user_account_id: UserIdDep, service: AssetServiceDep) -> CurrencyAssetsResponse:
    summary = await service.get_user_currency_assets_summary(user_account_id)
    assets = await service.get_user_currency_assets(user_account_id)
    return CurrencyAssetsResponse(
        user_currency_assets=[CurrencyAssetResponse.from_domain(a) for a in assets],
        user_currency_assets_summary=[CurrencyAssetSummaryEntry.from_domain(s) for s in summary],
    )


@router.post("")
async def add_currency_assets(
    body: list[CurrencyAssetCreate], user_account_id: UserIdDep, service: AssetServiceDep
) -> Response:
    await service.add_currency_assets(user_account_id, [a.to_domain() for a in body])
    return Response(status_code=status.HTTP_200_OK)


@router.get("/sample", response_model=CurrencyAssetsResponse)
async def get_sample_currency_assets(user_account_id: UserIdDep, samples: SampleServiceDep) -> CurrencyAssetsResponse:
    """Example holdings for users who have not entered any yet."""
    assets, summary = await samples.get_currency_assets()
    return CurrencyAssetsResponse(
        user_currency_assets=[CurrencyAssetResponse.from_domain(a) for a in assets],
        user_currency_assets_summary=[CurrencyAssetSummaryEntry.from_domain(s) for s in summary],
    )


@router.get("/{asset_id}", response_model=CurrencyAssetResponse)
async def get_currency_asset(asset_id: uuid.UUID, user_account_id: UserIdDep, service: AssetServiceDep) -> CurrencyAssetResponse:
    asset = await service.get_user_currency_asset(user_account_id, asset_id)
    if asset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Currency asset not found")
    return CurrencyAssetResponse.from_domain(asset)


@router.put("/{asset_id}", response_model=CurrencyAssetResponse)
async def update_currency_asset(
    asset_id: uuid.UUID, body: CurrencyAssetUpdate, user_account_id: UserIdDep, service: AssetServiceDep
) -> CurrencyAssetResponse:
    logger.info("User %s is updating currency asset %s", user_account_id, asset_id)
    asset = await service.update_currency_asset(
        user_account_id,
        asset_id,
        currency=body.currency,
        balance=body.balance,
        description=body.description,
        wallet_address=body.wallet_address,
    )
    if asset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Currency asset not found")
    return CurrencyAssetResponse.from_domain(asset)


@router.delete("/{asset_id}")
async def delete_currency_asset(asset_id: uuid.UUID, user_account_id: UserIdDep, service: AssetServiceDep) -> Response:
    if not await service.delete_currency_asset(user_account_id, asset_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Currency asset not found")
    return Response(status_code=status.HTTP_200_OK)
