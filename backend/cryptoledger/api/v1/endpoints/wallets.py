"""
CryptoLedger - Wallet Endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, status

from cryptoledger.core.ledger.service import LedgerService
from cryptoledger.dependencies import get_ledger_service
from cryptoledger.schemas.ledger import WalletCreate, WalletResponse

router = APIRouter()


@router.get("/{user_id}", response_model=List[WalletResponse])
async def list_wallets(
    user_id: int,
    service: LedgerService = Depends(get_ledger_service),
):
    """User's wallets, primary first."""
    return await service.list_user_wallets(user_id)


@router.post("/", response_model=WalletResponse, status_code=status.HTTP_201_CREATED)
async def register_wallet(
    payload: WalletCreate,
    service: LedgerService = Depends(get_ledger_service),
):
    return await service.register_wallet(
        user_id=payload.user_id,
        wallet_address=payload.wallet_address,
        wallet_type=payload.wallet_type,
        is_primary=payload.is_primary,
    )
