"""
CryptoLedger - Trading Schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from cryptoledger.db.models.transaction import OrderType, TransactionStatus, TransactionType


class OrderCreate(BaseModel):
    """Buy or sell order. The side comes from the route."""
    user_id: int = Field(..., description="Ordering user")
    wallet_id: int = Field(..., description="Wallet to debit or credit")
    asset_symbol: str = Field(..., min_length=1, max_length=20, description="Asset symbol, e.g. BTC")
    amount: Decimal = Field(..., max_digits=18, decimal_places=8, description="Units of the asset")
    order_type: OrderType = Field(default=OrderType.MARKET, description="MARKET or LIMIT")
    limit_price: Optional[Decimal] = Field(
        None, max_digits=18, decimal_places=8, description="Required for LIMIT orders")
    client_order_id: Optional[str] = Field(
        None,
        min_length=1,
        max_length=64,
        description="Idempotency key; resubmitting returns the original transaction",
    )


class TransactionResponse(BaseModel):
    """Settled transaction record."""
    id: int
    user_id: int
    wallet_id: int
    transaction_type: TransactionType
    asset_symbol: str
    amount: Decimal
    price_per_unit: Decimal
    total_value: Decimal
    fee: Decimal
    status: TransactionStatus
    transaction_hash: Optional[str] = None
    client_order_id: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
