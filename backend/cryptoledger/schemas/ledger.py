"""
CryptoLedger - Asset and Wallet Schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from cryptoledger.db.models.wallet import WalletType


class AssetResponse(BaseModel):
    """Asset price snapshot."""
    symbol: str
    name: str
    current_price: Decimal
    price_change_24h: Decimal
    price_change_percentage_24h: Decimal
    market_cap: Decimal
    volume_24h: Decimal
    last_updated: datetime

    model_config = {"from_attributes": True}


class AssetUpsert(BaseModel):
    """Price feed write for one symbol."""
    name: str = Field(..., min_length=1, max_length=100)
    current_price: Decimal = Field(..., max_digits=18, decimal_places=8, description="Price in fiat units")
    price_change_24h: Decimal = Decimal("0")
    price_change_percentage_24h: Decimal = Decimal("0")
    market_cap: Decimal = Decimal("0")
    volume_24h: Decimal = Decimal("0")


class WalletCreate(BaseModel):
    """Register an externally issued wallet."""
    user_id: int
    wallet_address: str = Field(..., min_length=1, max_length=128)
    wallet_type: WalletType
    is_primary: bool = False


class WalletResponse(BaseModel):
    """Wallet with its fiat balance."""
    id: int
    user_id: int
    wallet_address: str
    wallet_type: WalletType
    balance: Decimal
    is_primary: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
