"""
CryptoLedger - API v1 Router
"""
from fastapi import APIRouter

from cryptoledger.api.v1.endpoints import (
    orders, portfolio, dashboard, assets, wallets, transactions
)

api_router = APIRouter()


# API v1 root endpoint
@api_router.get("/", tags=["API Info"])
async def api_root():
    """API v1 root - returns version info."""
    return {
        "api": "CryptoLedger",
        "version": "v1",
        "status": "operational"
    }


# Include all endpoint routers
api_router.include_router(orders.router, prefix="/orders", tags=["Orders"])
api_router.include_router(portfolio.router, prefix="/portfolio", tags=["Portfolio"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(assets.router, prefix="/assets", tags=["Assets"])
api_router.include_router(wallets.router, prefix="/wallets", tags=["Wallets"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["Transactions"])
