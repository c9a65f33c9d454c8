"""
CryptoLedger - Portfolio Endpoints
"""
from typing import List
from fastapi import APIRouter, Depends

from cryptoledger.core.portfolio.valuation import PortfolioValuator
from cryptoledger.dependencies import get_portfolio_valuator
from cryptoledger.schemas.portfolio import PortfolioSummaryResponse, PositionValuationResponse

router = APIRouter()


@router.get("/{user_id}", response_model=List[PositionValuationResponse])
async def get_portfolio(
    user_id: int,
    valuator: PortfolioValuator = Depends(get_portfolio_valuator),
):
    """Positions valued at current prices, oldest first."""
    return await valuator.get_portfolio(user_id)


@router.get("/{user_id}/summary", response_model=PortfolioSummaryResponse)
async def get_portfolio_summary(
    user_id: int,
    valuator: PortfolioValuator = Depends(get_portfolio_valuator),
):
    return await valuator.get_summary(user_id)
