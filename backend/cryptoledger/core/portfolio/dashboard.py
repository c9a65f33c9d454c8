"""
CryptoLedger - Trading Dashboard

One-call overview for a user: portfolio summary, recent activity, the
valuated positions and a market watchlist.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from cryptoledger.config import settings
from cryptoledger.core.portfolio.valuation import (
    PortfolioSummary,
    PortfolioValuator,
    PositionValuation,
    aggregate,
)
from cryptoledger.core.pricing.oracle import PriceOracle
from cryptoledger.db.models.asset import CryptoAsset
from cryptoledger.db.models.transaction import Transaction
from cryptoledger.db.repositories.asset import AssetRepository
from cryptoledger.db.repositories.transaction import TransactionRepository
from cryptoledger.db.repositories.user import UserRepository
from cryptoledger.utils.exceptions import UserNotFoundError


@dataclass
class Dashboard:
    """Dashboard payload."""
    user_id: int
    portfolio_summary: PortfolioSummary
    recent_transactions: List[Transaction] = field(default_factory=list)
    portfolio_breakdown: List[PositionValuation] = field(default_factory=list)
    watchlist: List[CryptoAsset] = field(default_factory=list)


class DashboardService:
    """Assembles the trading dashboard from the ledger's read paths."""

    def __init__(
        self,
        db: AsyncSession,
        price_oracle: Optional[PriceOracle] = None,
        recent_limit: Optional[int] = None,
        watchlist_size: Optional[int] = None,
    ):
        self.db = db
        self.users = UserRepository(db)
        self.assets = AssetRepository(db)
        self.transactions = TransactionRepository(db)
        self.valuator = PortfolioValuator(db, price_oracle=price_oracle)
        self.recent_limit = settings.DASHBOARD_RECENT_TRANSACTIONS if recent_limit is None else recent_limit
        self.watchlist_size = settings.DASHBOARD_WATCHLIST_SIZE if watchlist_size is None else watchlist_size

    async def get_dashboard(self, user_id: int) -> Dashboard:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        breakdown = await self.valuator.get_portfolio(user_id)
        recent = await self.transactions.list_by_user(user_id, limit=self.recent_limit)
        watchlist = await self.assets.list_by_market_cap(limit=self.watchlist_size)

        logger.debug(
            f"Dashboard for user {user_id}: {len(breakdown)} positions, "
            f"{len(recent)} recent transactions"
        )
        return Dashboard(
            user_id=user_id,
            portfolio_summary=aggregate(breakdown),
            recent_transactions=recent,
            portfolio_breakdown=breakdown,
            watchlist=watchlist,
        )
