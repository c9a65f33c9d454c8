"""
CryptoLedger - Portfolio Module

Read-side valuation and the trading dashboard.
"""
from cryptoledger.core.portfolio.valuation import (
    PositionValuation,
    PortfolioSummary,
    PortfolioValuator,
    value_position,
    aggregate,
)
from cryptoledger.core.portfolio.dashboard import Dashboard, DashboardService

__all__ = [
    "PositionValuation",
    "PortfolioSummary",
    "PortfolioValuator",
    "value_position",
    "aggregate",
    "Dashboard",
    "DashboardService",
]
