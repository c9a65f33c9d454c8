"""
CryptoLedger - Transaction History Endpoint
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from cryptoledger.core.ledger.service import LedgerService
from cryptoledger.dependencies import get_ledger_service
from cryptoledger.schemas.trading import TransactionResponse

router = APIRouter()


@router.get("/{user_id}", response_model=List[TransactionResponse])
async def list_transactions(
    user_id: int,
    limit: Optional[int] = Query(None, ge=0, le=1000, description="Maximum records, newest first"),
    service: LedgerService = Depends(get_ledger_service),
):
    return await service.list_user_transactions(user_id, limit=limit)
