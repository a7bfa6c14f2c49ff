import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from balancemonitor.api.deps import get_address_validators, get_blockchain_wallet_service, get_current_user_id
from balancemonitor.api.schemas.balance import CurrencyBalanceResponse
from balancemonitor.api.schemas.blockchain_wallets import (
    BlockchainWalletCreate,
    BlockchainWalletResponse,
    BlockchainWalletUpdate,
    CreateBlockchainWalletsError,
    UpdateBlockchainWalletError,
)
from balancemonitor.domain.models.balance import WalletUpdate
from balancemonitor.infra.blockchain.base import WalletAddressValidatorRegistry
from balancemonitor.wallet.blockchain_service import BlockchainWalletService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blockchain", tags=["blockchain-wallets"])

UserIdDep = Annotated[str, Depends(get_current_user_id)]
WalletServiceDep = Annotated[BlockchainWalletService, Depends(get_blockchain_wallet_service)]
ValidatorsDep = Annotated[WalletAddressValidatorRegistry, Depends(get_address_validators)]


def _error_response(error: CreateBlockchainWalletsError | UpdateBlockchainWalletError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.model_dump(by_alias=True))


@router.post("/wallets")
async def add_wallets(
    body: list[BlockchainWalletCreate],
    user_account_id: UserIdDep,
    service: WalletServiceDep,
    validators: ValidatorsDep,
) -> Response:
    logger.info("User %s is adding %d blockchain wallets", user_account_id, len(body))
    error = CreateBlockchainWalletsError()
    for wallet in body:
        if not service.supports_currency(wallet.currency) or not validators.is_wallet_address_valid(
            wallet.currency, wallet.wallet_address
        ):
            error.invalid_addresses.append(wallet.wallet_address)
            continue
        result = await service.add_wallet(user_account_id, wallet.wallet_address, wallet.currency, wallet.description)
        if result.user_already_has_wallet_with_this_address:
            error.duplicated_addresses.append(wallet.wallet_address)

    if error.invalid_addresses or error.duplicated_addresses:
        logger.warning("User %s could not add some wallets: %s", user_account_id, error)
        return _error_response(error)
    return Response(status_code=status.HTTP_200_OK)


@router.get("/wallets", response_model=list[BlockchainWalletResponse])
async def list_wallets(user_account_id: UserIdDep, service: WalletServiceDep) -> list[BlockchainWalletResponse]:
    wallets = await service.get_wallets(user_account_id)
    return [BlockchainWalletResponse.from_domain(w) for w in wallets]


@router.get("/wallets/currency/balance", response_model=list[CurrencyBalanceResponse])
async def get_currency_balance(user_account_id: UserIdDep, service: WalletServiceDep) -> list[CurrencyBalanceResponse]:
    balances = await service.get_currency_balances(user_account_id)
    return [CurrencyBalanceResponse.from_domain(b) for b in balances]


@router.get("/wallets/{wallet_id}", response_model=BlockchainWalletResponse)
async def get_wallet(
    wallet_id: uuid.UUID, user_account_id: UserIdDep, service: WalletServiceDep
) -> BlockchainWalletResponse:
    wallet = await service.get_wallet(user_account_id, wallet_id)
    if wallet is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wallet not found")
    return BlockchainWalletResponse.from_domain(wallet)


@router.post("/wallets/balance/refresh", response_model=list[BlockchainWalletResponse])
async def refresh_wallets_balance(
    user_account_id: UserIdDep, service: WalletServiceDep
) -> list[BlockchainWalletResponse]:
    logger.info("User %s is refreshing blockchain wallets balance", user_account_id)
    wallets = await service.refresh_wallet_balances(user_account_id)
    return [BlockchainWalletResponse.from_domain(w) for w in wallets]


@router.put("/wallet")
async def update_wallet(
    body: BlockchainWalletUpdate,
    user_account_id: UserIdDep,
    service: WalletServiceDep,
    validators: ValidatorsDep,
) -> Response:
    logger.info("User %s is updating wallet %s", user_account_id, body.id)
    if not service.supports_currency(body.currency) or not validators.is_wallet_address_valid(
        body.currency, body.wallet_address
    ):
        return _error_response(UpdateBlockchainWalletError(is_address_invalid=True))

    result = await service.update_wallet(
        user_account_id,
        WalletUpdate(
            id=body.id,
            wallet_address=body.wallet_address,
            currency=body.currency,
            description=body.description,
        ),
    )
    if not result.is_successful:
        logger.warning("User %s did not update wallet %s: %s", user_account_id, body.id, result)
        return _error_response(
            UpdateBlockchainWalletError(
                is_address_duplicated=result.user_already_has_wallet_with_this_address,
                is_id_invalid=result.user_has_no_wallet_with_given_id,
            )
        )
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/wallet/{wallet_address}")
async def delete_wallet_by_address(wallet_address: str, user_account_id: UserIdDep, service: WalletServiceDep) -> Response:
    if not await service.delete_wallet_by_address(user_account_id, wallet_address):
        logger.warning("User %s tried to delete blockchain wallet %s which was not found", user_account_id, wallet_address)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wallet not found")
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/wallets/{wallet_id}")
async def delete_wallet_by_id(wallet_id: uuid.UUID, user_account_id: UserIdDep, service: WalletServiceDep) -> Response:
    if not await service.delete_wallet_by_id(user_account_id, wallet_id):
        logger.warning("User %s tried to delete blockchain wallet %s which was not found", user_account_id, wallet_id)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wallet not found")
    return Response(status_code=status.HTTP_200_OK)
