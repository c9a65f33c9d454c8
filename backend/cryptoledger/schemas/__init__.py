"""
CryptoLedger - Pydantic Schemas
"""
from cryptoledger.schemas.trading import OrderCreate, TransactionResponse
from cryptoledger.schemas.ledger import (
    AssetResponse,
    AssetUpsert,
    WalletCreate,
    WalletResponse,
)
from cryptoledger.schemas.portfolio import (
    PositionValuationResponse,
    PortfolioSummaryResponse,
    DashboardResponse,
)

__all__ = [
    "OrderCreate",
    "TransactionResponse",
    "AssetResponse",
    "AssetUpsert",
    "WalletCreate",
    "WalletResponse",
    "PositionValuationResponse",
    "PortfolioSummaryResponse",
    "DashboardResponse",
]
