"""
CryptoLedger - Dependencies
Dependency injection for FastAPI endpoints
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cryptoledger.db.database import get_db
from cryptoledger.core.ledger.service import LedgerService
from cryptoledger.core.portfolio.dashboard import DashboardService
from cryptoledger.core.portfolio.valuation import PortfolioValuator
from cryptoledger.core.trading.execution import OrderExecutionEngine


async def get_execution_engine(
    db: AsyncSession = Depends(get_db)
) -> OrderExecutionEngine:
    """Engine bound to the request's session and the configured fee rate."""
    return OrderExecutionEngine(db)


async def get_portfolio_valuator(
    db: AsyncSession = Depends(get_db)
) -> PortfolioValuator:
    return PortfolioValuator(db)


async def get_dashboard_service(
    db: AsyncSession = Depends(get_db)
) -> DashboardService:
    return DashboardService(db)


async def get_ledger_service(
    db: AsyncSession = Depends(get_db)
) -> LedgerService:
    return LedgerService(db)
