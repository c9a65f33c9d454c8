"""
CryptoLedger - Asset Endpoints
"""
from typing import List
from fastapi import APIRouter, Depends

from cryptoledger.core.ledger.service import LedgerService
from cryptoledger.dependencies import get_ledger_service
from cryptoledger.schemas.ledger import AssetResponse, AssetUpsert

router = APIRouter()


@router.get("/", response_model=List[AssetResponse])
async def list_assets(service: LedgerService = Depends(get_ledger_service)):
    """Tradable assets, largest market cap first."""
    return await service.list_assets()


@router.put("/{symbol}", response_model=AssetResponse)
async def upsert_asset(
    symbol: str,
    payload: AssetUpsert,
    service: LedgerService = Depends(get_ledger_service),
):
    """Create or refresh the price snapshot for ``symbol``."""
    return await service.upsert_asset(symbol=symbol, **payload.model_dump())
