"""
CryptoLedger - Portfolio Schemas
"""
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel

from cryptoledger.schemas.ledger import AssetResponse
from cryptoledger.schemas.trading import TransactionResponse


class PositionValuationResponse(BaseModel):
    """Position marked to the live price."""
    asset_symbol: str
    amount: Decimal
    average_buy_price: Decimal
    current_price: Decimal
    current_value: Decimal
    invested: Decimal
    profit_loss: Decimal
    profit_loss_percentage: Decimal

    model_config = {"from_attributes": True}


class PortfolioSummaryResponse(BaseModel):
    """Portfolio totals."""
    total_value: Decimal
    total_investment: Decimal
    total_profit_loss: Decimal
    total_profit_loss_percentage: Decimal
    position_count: int
    top_performing_asset: Optional[str] = None
    worst_performing_asset: Optional[str] = None

    model_config = {"from_attributes": True}


class DashboardResponse(BaseModel):
    """Trading dashboard."""
    user_id: int
    portfolio_summary: PortfolioSummaryResponse
    recent_transactions: list[TransactionResponse]
    portfolio_breakdown: list[PositionValuationResponse]
    watchlist: list[AssetResponse]

    model_config = {"from_attributes": True}
